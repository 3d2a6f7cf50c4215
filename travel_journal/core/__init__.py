"""Core journal rules: access policy and social interactions."""

from travel_journal.core.access import FeedMode, Role, can_manage, can_view, visible_set
from travel_journal.core.social import SocialService

__all__ = [
    "FeedMode",
    "Role",
    "SocialService",
    "can_manage",
    "can_view",
    "visible_set",
]

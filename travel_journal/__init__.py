"""Travel Journal - journal entries, social interactions and image uploads.

Examples:
    >>> from travel_journal import __version__
    >>> __version__
    '1.0.0'
"""

__version__ = "1.0.0"

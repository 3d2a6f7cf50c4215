"""Azure storage connection string parsing.

Turns a raw ``Key=Value;Key=Value`` connection string into account name,
key and endpoint. Parsing is pure so it can be tested without a network;
``resolve_client`` is the only function that builds a live client.

Values pasted into app settings are often wrapped in quotes or carry stray
line breaks, so both are stripped before splitting.

Examples:
    >>> from travel_journal.storage.connection import parse_connection_string
    >>> info = parse_connection_string(
    ...     '"DefaultEndpointsProtocol=https;AccountName=acct;AccountKey=a2V5==;'
    ...     'EndpointSuffix=core.windows.net"'
    ... )
    >>> info.account_url
    'https://acct.blob.core.windows.net'

Tests:
    - tests/unit/test_storage/test_connection.py
"""

from __future__ import annotations

from dataclasses import dataclass, field

from azure.storage.blob.aio import BlobServiceClient

from travel_journal.errors import ConfigurationError

DEFAULT_PROTOCOL = "https"
DEFAULT_ENDPOINT_SUFFIX = "core.windows.net"

QUOTE_CHARS = ("\"", "'")


@dataclass(frozen=True)
class ConnectionInfo:
    """Parsed storage account connection details.

    Attributes:
        account_name: Storage account name.
        account_key: Shared key; excluded from repr.
        protocol: URL scheme, usually https.
        endpoint_suffix: Cloud endpoint suffix.
        blob_endpoint: Explicit blob endpoint (emulators), overrides the derived URL.
    """

    account_name: str
    account_key: str = field(repr=False)
    protocol: str = DEFAULT_PROTOCOL
    endpoint_suffix: str = DEFAULT_ENDPOINT_SUFFIX
    blob_endpoint: str | None = None

    @property
    def account_url(self) -> str:
        """Blob service URL the client is bound to."""
        if self.blob_endpoint:
            return self.blob_endpoint.rstrip("/")
        return f"{self.protocol}://{self.account_name}.blob.{self.endpoint_suffix}"

    @property
    def credential(self) -> dict[str, str]:
        """Shared key credential in the form the Azure SDK accepts."""
        return {"account_name": self.account_name, "account_key": self.account_key}


def strip_quotes(value: str) -> str:
    """Trim whitespace and remove one layer of matching quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        value = value[1:-1].strip()
    return value


def split_segments(raw: str) -> dict[str, str]:
    """Split a connection string into a lower-cased key to value mapping.

    Segments without ``=`` are ignored. Only the first ``=`` separates key
    from value, so base64 keys ending in ``==`` survive intact.
    """
    cleaned = strip_quotes(raw).replace("\r", "").replace("\n", "")

    segments: dict[str, str] = {}
    for segment in cleaned.split(";"):
        if not segment.strip() or "=" not in segment:
            continue
        key, value = segment.split("=", 1)
        key = strip_quotes(key)
        if key:
            segments[key.lower()] = strip_quotes(value)
    return segments


def parse_connection_string(raw: str | None) -> ConnectionInfo:
    """Parse a storage connection string.

    Args:
        raw: Connection string as found in the environment.

    Returns:
        ConnectionInfo with defaults applied.

    Raises:
        ConfigurationError: If the string is empty or lacks AccountName/AccountKey.
    """
    if raw is None or not raw.strip():
        raise ConfigurationError("Storage connection string is not set")

    segments = split_segments(raw)

    account_name = segments.get("accountname", "")
    account_key = segments.get("accountkey", "")
    if not account_name:
        raise ConfigurationError("Storage connection string is missing AccountName")
    if not account_key:
        raise ConfigurationError("Storage connection string is missing AccountKey")

    protocol = (segments.get("defaultendpointsprotocol") or DEFAULT_PROTOCOL).lower()

    suffix_tokens = segments.get("endpointsuffix", "").split()
    endpoint_suffix = suffix_tokens[0] if suffix_tokens else DEFAULT_ENDPOINT_SUFFIX

    blob_endpoint_tokens = segments.get("blobendpoint", "").split()
    blob_endpoint = blob_endpoint_tokens[0] if blob_endpoint_tokens else None

    return ConnectionInfo(
        account_name=account_name,
        account_key=account_key,
        protocol=protocol,
        endpoint_suffix=endpoint_suffix,
        blob_endpoint=blob_endpoint,
    )


def resolve_client(raw: str | None) -> BlobServiceClient:
    """Build an async blob service client from a connection string.

    Raises:
        ConfigurationError: If the connection string is unusable.
    """
    info = parse_connection_string(raw)
    return BlobServiceClient(account_url=info.account_url, credential=info.credential)

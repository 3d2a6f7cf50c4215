"""multipart/form-data decoding for uploads.

Wraps the python-multipart streaming parser and collects every part of
the body, file or form field, in order.

Examples:
    >>> from travel_journal.storage.multipart import decode_multipart, select_file_part
    >>> parts = decode_multipart(body, "multipart/form-data; boundary=xyz")
    >>> select_file_part(parts).filename
    'kyoto.jpg'

Tests:
    - tests/unit/test_storage/test_multipart.py
"""

from __future__ import annotations

from dataclasses import dataclass

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from travel_journal.errors import MalformedRequestError


@dataclass
class MultipartPart:
    """One decoded body part.

    Attributes:
        name: Form field name, if declared.
        filename: Original filename; None for plain form fields.
        content_type: Declared mime type, if any.
        data: Raw payload bytes.
    """

    name: str | None
    filename: str | None
    content_type: str | None
    data: bytes

    @property
    def is_file(self) -> bool:
        return self.filename is not None


def _decode(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value.decode("latin-1")


def extract_boundary(content_type_header: str | None) -> bytes:
    """Return the boundary token of a multipart content-type header.

    Raises:
        MalformedRequestError: If the header is not multipart or has no boundary.
    """
    if not content_type_header:
        raise MalformedRequestError("Missing Content-Type header")

    media_type, params = parse_options_header(content_type_header)
    if not media_type.lower().startswith(b"multipart/"):
        raise MalformedRequestError("Content-Type must be multipart/form-data")

    boundary = params.get(b"boundary")
    if not boundary:
        raise MalformedRequestError("Multipart boundary not found in Content-Type")
    return boundary


class _PartCollector:
    """Parser callbacks accumulating parts in body order."""

    def __init__(self) -> None:
        self.parts: list[MultipartPart] = []
        self._headers: dict[bytes, bytes] = {}
        self._field = b""
        self._value = b""
        self._data = bytearray()

    def on_part_begin(self) -> None:
        self._headers = {}
        self._data = bytearray()

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._field.strip().lower()] = self._value.strip()
        self._field = b""
        self._value = b""

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._data += data[start:end]

    def on_part_end(self) -> None:
        name = filename = None
        disposition = self._headers.get(b"content-disposition")
        if disposition:
            _, options = parse_options_header(disposition)
            if b"name" in options:
                name = _decode(options[b"name"])
            if b"filename" in options:
                filename = _decode(options[b"filename"])

        content_type = self._headers.get(b"content-type")
        self.parts.append(
            MultipartPart(
                name=name,
                filename=filename,
                content_type=_decode(content_type) if content_type else None,
                data=bytes(self._data),
            )
        )

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
        }


def decode_multipart(body: bytes, content_type_header: str | None) -> list[MultipartPart]:
    """Parse a multipart body into its parts.

    Args:
        body: Raw request body.
        content_type_header: Request Content-Type header.

    Returns:
        Parts in body order. Parts cut off by a truncated body are dropped.

    Raises:
        MalformedRequestError: On a missing boundary or unparseable body.
    """
    boundary = extract_boundary(content_type_header)

    collector = _PartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as e:
        raise MalformedRequestError(f"Malformed multipart body: {e}") from e

    return collector.parts


def select_file_part(parts: list[MultipartPart]) -> MultipartPart:
    """Pick the uploaded file among the decoded parts.

    Prefers the first part declaring a filename, falling back to the
    first part overall.

    Raises:
        MalformedRequestError: If there are no parts or the selected part is empty.
    """
    if not parts:
        raise MalformedRequestError("No file provided")

    selected = next((p for p in parts if p.is_file), parts[0])
    if not selected.data:
        raise MalformedRequestError("Uploaded file is empty")
    return selected

"""Tests for travel_journal.storage.multipart module.

Covers:
    - boundary extraction from the Content-Type header
    - decoding file parts and plain form fields
    - file part selection and empty uploads
    - malformed bodies
"""

import pytest

from travel_journal.errors import MalformedRequestError
from travel_journal.storage.multipart import (
    MultipartPart,
    decode_multipart,
    extract_boundary,
    select_file_part,
)
from tests.utils.builders import BOUNDARY, build_multipart

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"


@pytest.mark.fast
class TestExtractBoundary:
    """Tests for extract_boundary()."""

    def test_plain(self):
        assert extract_boundary(f"multipart/form-data; boundary={BOUNDARY}") == BOUNDARY.encode()

    def test_quoted(self):
        assert extract_boundary('multipart/form-data; boundary="abc123"') == b"abc123"

    def test_case_insensitive_media_type(self):
        assert extract_boundary("Multipart/Form-Data; boundary=abc") == b"abc"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, header):
        with pytest.raises(MalformedRequestError, match="Content-Type"):
            extract_boundary(header)

    def test_not_multipart(self):
        with pytest.raises(MalformedRequestError, match="multipart"):
            extract_boundary("application/json")

    def test_no_boundary(self):
        with pytest.raises(MalformedRequestError, match="boundary"):
            extract_boundary("multipart/form-data")


@pytest.mark.fast
class TestDecodeMultipart:
    """Tests for decode_multipart()."""

    def test_single_file_part(self):
        body, header = build_multipart([("file", "kyoto.jpg", "image/jpeg", JPEG_BYTES)])

        parts = decode_multipart(body, header)

        assert len(parts) == 1
        assert parts[0].name == "file"
        assert parts[0].filename == "kyoto.jpg"
        assert parts[0].content_type == "image/jpeg"
        assert parts[0].data == JPEG_BYTES
        assert parts[0].is_file

    def test_fields_and_files_in_body_order(self):
        body, header = build_multipart([
            ("caption", None, None, b"Temple at dusk"),
            ("file", "kyoto.jpg", "image/jpeg", JPEG_BYTES),
            ("album", None, None, b"Japan 2024"),
        ])

        parts = decode_multipart(body, header)

        assert [p.name for p in parts] == ["caption", "file", "album"]
        assert parts[0].filename is None
        assert not parts[0].is_file
        assert parts[0].data == b"Temple at dusk"
        assert parts[1].data == JPEG_BYTES
        assert parts[2].data == b"Japan 2024"

    def test_payload_containing_crlf_survives(self):
        payload = b"line one\r\nline two\r\n--not-the-boundary\r\n"
        body, header = build_multipart([("file", "notes.txt", "text/plain", payload)])

        assert decode_multipart(body, header)[0].data == payload

    def test_part_without_content_type(self):
        body, header = build_multipart([("file", "blob", None, b"abc")])

        assert decode_multipart(body, header)[0].content_type is None

    def test_garbage_body(self):
        header = f"multipart/form-data; boundary={BOUNDARY}"
        with pytest.raises(MalformedRequestError):
            decode_multipart(b"this is not a multipart body", header)

    def test_bad_header_checked_before_body(self):
        body, _ = build_multipart([("file", "kyoto.jpg", "image/jpeg", JPEG_BYTES)])
        with pytest.raises(MalformedRequestError, match="boundary"):
            decode_multipart(body, "multipart/form-data")


@pytest.mark.fast
class TestSelectFilePart:
    """Tests for select_file_part()."""

    def test_prefers_part_with_filename(self):
        field = MultipartPart(name="caption", filename=None, content_type=None, data=b"hi")
        file = MultipartPart(name="file", filename="a.png", content_type="image/png", data=b"png")

        assert select_file_part([field, file]) is file

    def test_first_file_wins(self):
        first = MultipartPart(name="a", filename="a.png", content_type=None, data=b"1")
        second = MultipartPart(name="b", filename="b.png", content_type=None, data=b"2")

        assert select_file_part([first, second]) is first

    def test_falls_back_to_first_part(self):
        only = MultipartPart(name="file", filename=None, content_type="image/png", data=b"png")

        assert select_file_part([only]) is only

    def test_no_parts(self):
        with pytest.raises(MalformedRequestError, match="No file provided"):
            select_file_part([])

    def test_empty_payload(self):
        body, header = build_multipart([("file", "empty.jpg", "image/jpeg", b"")])

        with pytest.raises(MalformedRequestError, match="empty"):
            select_file_part(decode_multipart(body, header))

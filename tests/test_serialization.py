"""Unit tests for multipart encoding of drafts."""

import json
from dataclasses import replace

import httpx

from campaignform.models import PlatformSelection
from campaignform.serialization import ATTACHMENT_PART, encode_multipart, encode_platform


def _build_request(parts) -> httpx.Request:
    request = httpx.Request("POST", "https://hooks.example.com/campaigns", files=parts)
    request.read()
    return request


class TestEncodeMultipart:
    """Test the parts produced for a draft."""

    def test_one_text_part_per_field(self, valid_draft):
        parts = encode_multipart(valid_draft)
        names = [name for name, _ in parts]

        assert names == list(valid_draft.to_dict())
        assert ATTACHMENT_PART not in names

    def test_text_parts_have_no_filename(self, valid_draft):
        parts = dict(encode_multipart(valid_draft))

        assert parts["campaignName"] == (None, b"Summer Launch", None)
        assert parts["notes"] == (None, b"Focus on the new product line.", None)

    def test_platform_is_json(self, valid_draft):
        draft = replace(valid_draft, platform=PlatformSelection(instagram=True, youtube=True))
        _, value, _ = dict(encode_multipart(draft))["platform"]

        assert json.loads(value) == {"instagram": True, "facebook": False, "youtube": True}
        assert value == encode_platform(draft).encode("utf-8")

    def test_attachment_part(self, valid_draft, pdf_attachment):
        parts = encode_multipart(replace(valid_draft, attachment=pdf_attachment))

        assert parts[-1] == (ATTACHMENT_PART, ("brief.pdf", b"%PDF-1.4 brief", "application/pdf"))


class TestMultipartBody:
    """Test the body httpx builds from the parts."""

    def test_multipart_without_attachment(self, valid_draft):
        request = _build_request(encode_multipart(valid_draft))

        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="campaignName"' in request.content
        assert b"Summer Launch" in request.content
        assert b"filename=" not in request.content

    def test_multipart_with_attachment(self, valid_draft, pdf_attachment):
        request = _build_request(encode_multipart(replace(valid_draft, attachment=pdf_attachment)))

        assert b'name="attachment"; filename="brief.pdf"' in request.content
        assert b"Content-Type: application/pdf" in request.content
        assert b"%PDF-1.4 brief" in request.content

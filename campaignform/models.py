"""Data model of the campaign intake form.

The form record is CampaignDraft, an immutable value. Edits produce a new
draft, so a draft handed to the submission controller cannot change under it.
On the wire, field names are camelCase; in Python they are snake_case, and
FIELD_NAMES maps one to the other.

CAMPAIGN_DRAFT_SCHEMA describes the structure of a serialized draft. It is
used by CampaignDraft.from_dict to reject malformed payloads before they reach
the validation engine, which only deals with business rules.
"""

import mimetypes
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator

from campaignform.errors import InvalidDraftError
from campaignform.types import Platform, Priority


# camelCase wire name -> snake_case attribute name, in form order
FIELD_NAMES: Dict[str, str] = {
    "campaignName": "campaign_name",
    "campaignType": "campaign_type",
    "brandName": "brand_name",
    "niche": "niche",
    "budget": "budget",
    "deliverables": "deliverables",
    "platform": "platform",
    "influencer": "influencer",
    "followers": "followers",
    "startDate": "start_date",
    "endDate": "end_date",
    "priority": "priority",
    "notes": "notes",
    "attachment": "attachment",
}

TEXT_FIELDS = tuple(name for name in FIELD_NAMES if name not in ("platform", "attachment"))


CAMPAIGN_DRAFT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        **{name: {"type": "string"} for name in TEXT_FIELDS},
        "priority": {"type": "string", "enum": [""] + [p.value for p in Priority]},
        "platform": {
            "type": "object",
            "properties": {p.value: {"type": "boolean"} for p in Platform},
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

_draft_validator = Draft7Validator(CAMPAIGN_DRAFT_SCHEMA)


@dataclass(frozen=True)
class PlatformSelection:
    """Independent on/off flags for each platform checkbox."""
    instagram: bool = False
    facebook: bool = False
    youtube: bool = False

    def is_selected(self, platform: Platform) -> bool:
        return getattr(self, Platform(platform).value)

    def with_flag(self, platform: Platform, checked: bool) -> "PlatformSelection":
        """Return a copy with one flag changed."""
        return replace(self, **{Platform(platform).value: bool(checked)})

    def selected(self) -> List[Platform]:
        return [p for p in Platform if self.is_selected(p)]

    def to_dict(self) -> Dict[str, bool]:
        return {p.value: self.is_selected(p) for p in Platform}

    @classmethod
    def from_dict(cls, data: Dict[str, bool]) -> "PlatformSelection":
        return cls(**{p.value: bool(data.get(p.value, False)) for p in Platform})


@dataclass(frozen=True)
class Attachment:
    """A file attached to the campaign.

    Attributes:
        filename: Original file name, sent with the multipart file part
        content_type: Declared MIME type (e.g., "image/png")
        content: Raw file bytes

    Examples:
        >>> att = Attachment(filename="brief.pdf", content_type="application/pdf", content=b"%PDF")
        >>> att.size
        4
    """
    filename: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        """Size of the attachment in bytes."""
        return len(self.content)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        content_type: Optional[str] = None,
    ) -> "Attachment":
        """Load an attachment from disk.

        Args:
            path: File to read
            content_type: Declared MIME type. Guessed from the file name if omitted,
                falling back to "application/octet-stream".

        Returns:
            Attachment holding the file's bytes
        """
        path = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content_type=content_type, content=path.read_bytes())


@dataclass(frozen=True)
class CampaignDraft:
    """The campaign form record.

    All text fields hold the raw user input; an empty string means the field
    was left blank. priority is "" when unset, otherwise a Priority value.

    Examples:
        >>> draft = empty_draft()
        >>> draft.campaign_name
        ''
        >>> draft.platform.instagram
        False
    """
    campaign_name: str = ""
    campaign_type: str = ""
    brand_name: str = ""
    niche: str = ""
    budget: str = ""
    deliverables: str = ""
    platform: PlatformSelection = field(default_factory=PlatformSelection)
    influencer: str = ""
    followers: str = ""
    start_date: str = ""
    end_date: str = ""
    priority: str = ""
    notes: str = ""
    attachment: Optional[Attachment] = None

    def get(self, name: str) -> Any:
        """Read a field by its camelCase name."""
        return getattr(self, FIELD_NAMES[name])

    def text_fields(self) -> Dict[str, str]:
        """Return the text fields keyed by camelCase name, in form order."""
        return {name: self.get(name) for name in TEXT_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire representation.

        The attachment is binary and is not part of the dict; the serializer
        sends it as a separate file part.
        """
        result: Dict[str, Any] = {}
        for name in FIELD_NAMES:
            if name == "platform":
                result[name] = self.platform.to_dict()
            elif name != "attachment":
                result[name] = self.get(name)
        return result

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> "CampaignDraft":
        """Create a draft from its camelCase wire representation.

        Missing keys take their default value.

        Args:
            data: camelCase mapping as produced by to_dict
            attachment: Optional attachment to carry along

        Raises:
            InvalidDraftError: If the payload does not match CAMPAIGN_DRAFT_SCHEMA
        """
        problems = []
        for error in sorted(_draft_validator.iter_errors(data), key=lambda e: list(e.path)):
            location = ".".join(str(p) for p in error.path) or "<root>"
            problems.append(f"{location}: {error.message}")
        if problems:
            raise InvalidDraftError(problems)

        kwargs: Dict[str, Any] = {
            FIELD_NAMES[name]: value for name, value in data.items() if name in TEXT_FIELDS
        }
        if "platform" in data:
            kwargs["platform"] = PlatformSelection.from_dict(data["platform"])
        return cls(attachment=attachment, **kwargs)


def empty_draft() -> CampaignDraft:
    """Return the default draft: all text blank, no platforms, no attachment."""
    return CampaignDraft()


__all__ = [
    "FIELD_NAMES",
    "TEXT_FIELDS",
    "CAMPAIGN_DRAFT_SCHEMA",
    "PlatformSelection",
    "Attachment",
    "CampaignDraft",
    "empty_draft",
]

"""In-memory state of a campaign form.

FormStateStore holds the current CampaignDraft and the ErrorSet shown next to
the fields. Updates are explicit: the caller decides whether an input is a
scalar field, a platform checkbox, or the attachment, and builds the matching
update object.

Usage:
    >>> store = FormStateStore()
    >>> store.set_field("campaignName", "Summer Launch")
    >>> store.set_platform(Platform.INSTAGRAM, True)
    >>> store.snapshot().platform.instagram
    True
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from campaignform.errors import ErrorSet, UnknownFieldError
from campaignform.models import FIELD_NAMES, TEXT_FIELDS, Attachment, CampaignDraft, empty_draft
from campaignform.types import Platform, Priority


@dataclass(frozen=True)
class SetScalarField:
    """Replace the value of one text field (camelCase name)."""
    name: str
    value: str


@dataclass(frozen=True)
class SetPlatformFlag:
    """Check or uncheck one platform."""
    platform: Platform
    checked: bool


@dataclass(frozen=True)
class SetAttachment:
    """Attach a file, or clear the attachment with None."""
    attachment: Optional[Attachment]


FieldUpdate = Union[SetScalarField, SetPlatformFlag, SetAttachment]


def _normalize_scalar(name: str, value: str) -> str:
    """Check a text field value before it enters the draft.

    Enum members are stored as their value; priority must be blank or a
    Priority value.
    """
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str):
        raise TypeError(f"Field '{name}' expects a string, got {type(value).__name__}")
    if name == "priority" and value:
        value = Priority(value).value
    return value


class FormStateStore:
    """Single-owner mutable form record plus its parallel ErrorSet.

    Every update clears the error of the field it touches and leaves all other
    errors alone. Errors are not re-validated on edit; they are recomputed on
    the next submit attempt.
    """

    def __init__(self, draft: Optional[CampaignDraft] = None):
        self._draft = draft if draft is not None else empty_draft()
        self._errors: ErrorSet = {}

    @property
    def errors(self) -> ErrorSet:
        """Copy of the current ErrorSet."""
        return dict(self._errors)

    def error_for(self, name: str) -> Optional[str]:
        return self._errors.get(name)

    def apply(self, update: FieldUpdate) -> None:
        """Apply one field update.

        Raises:
            UnknownFieldError: If a SetScalarField names a field that is not a
                text field of the form
            TypeError: If the update is not one of the known update types, or a
                scalar value is not a string
            ValueError: If a non-empty priority is not a Priority value
        """
        if isinstance(update, SetScalarField):
            if update.name not in TEXT_FIELDS:
                raise UnknownFieldError(update.name)
            value = _normalize_scalar(update.name, update.value)
            self._draft = replace(self._draft, **{FIELD_NAMES[update.name]: value})
            self._clear_error(update.name)
        elif isinstance(update, SetPlatformFlag):
            platform = self._draft.platform.with_flag(update.platform, update.checked)
            self._draft = replace(self._draft, platform=platform)
            self._clear_error("platform")
        elif isinstance(update, SetAttachment):
            self._draft = replace(self._draft, attachment=update.attachment)
            self._clear_error("attachment")
        else:
            raise TypeError(f"Unsupported field update: {update!r}")

    def set_field(self, name: str, value: str) -> None:
        self.apply(SetScalarField(name=name, value=value))

    def set_platform(self, platform: Platform, checked: bool) -> None:
        self.apply(SetPlatformFlag(platform=Platform(platform), checked=checked))

    def set_attachment(self, attachment: Optional[Attachment]) -> None:
        self.apply(SetAttachment(attachment=attachment))

    def replace_errors(self, errors: ErrorSet) -> None:
        """Replace the whole ErrorSet, e.g. with the result of a submit attempt."""
        self._errors = dict(errors)

    def reset(self) -> None:
        """Restore the default draft and clear all errors."""
        self._draft = empty_draft()
        self._errors = {}

    def snapshot(self) -> CampaignDraft:
        """Return the current draft.

        Drafts are immutable, so later edits to the store never affect a
        snapshot already taken.
        """
        return self._draft

    def _clear_error(self, name: str) -> None:
        self._errors.pop(name, None)


__all__ = [
    "SetScalarField",
    "SetPlatformFlag",
    "SetAttachment",
    "FieldUpdate",
    "FormStateStore",
]

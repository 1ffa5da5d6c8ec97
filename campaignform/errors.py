"""Error types for the campaign intake form.

Two kinds of failure exist in the form runtime:

- Field validation failures and network failures are expected outcomes. They
  are reported as values: FieldError entries collected into an ErrorSet, and
  SubmitOutcome objects returned by the controller.
- Misuse of the runtime (bad settings, malformed payloads, unknown field
  names, overlapping submits) raises a CampaignFormError subclass.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from typing_extensions import TypeAlias

from campaignform.types import FieldErrorCode

ErrorSet: TypeAlias = Dict[str, str]
"""Mapping of camelCase field name to a human-readable message.

A missing key means the field is valid.
"""


@dataclass(frozen=True)
class FieldError:
    """Per-field validation error details.

    Attributes:
        field: camelCase field name (e.g., "campaignName", "attachment")
        code: Specific validation error code
        message: Human-readable error description shown inline on the form

    Examples:
        >>> err = FieldError(
        ...     field="campaignName",
        ...     code=FieldErrorCode.REQUIRED,
        ...     message="Campaign Name is required."
        ... )
        >>> err.field
        'campaignName'
    """
    field: str
    code: FieldErrorCode
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "field": self.field,
            "code": self.code.value,
            "message": self.message,
        }


def to_error_set(errors: Sequence[FieldError]) -> ErrorSet:
    """Collapse a list of field errors into an ErrorSet.

    The first error recorded for a field wins.
    """
    result: ErrorSet = {}
    for error in errors:
        result.setdefault(error.field, error.message)
    return result


class CampaignFormError(Exception):
    """Base class for all errors raised by the form runtime."""


class ConfigurationError(CampaignFormError):
    """Raised when webhook settings are invalid."""


class InvalidDraftError(CampaignFormError):
    """Raised when a payload does not have the shape of a campaign draft.

    Attributes:
        problems: Human-readable description of each structural problem
    """

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Invalid campaign draft payload: " + "; ".join(problems))


class UnknownFieldError(CampaignFormError):
    """Raised when an update names a field the form does not have.

    Attributes:
        field: The offending field name
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unknown form field: '{field}'")


class SubmissionInProgressError(CampaignFormError):
    """Raised when submit is called while a previous submit is still in flight."""


__all__ = [
    "ErrorSet",
    "FieldError",
    "to_error_set",
    "CampaignFormError",
    "ConfigurationError",
    "InvalidDraftError",
    "UnknownFieldError",
    "SubmissionInProgressError",
]

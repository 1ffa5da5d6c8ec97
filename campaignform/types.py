"""Core type definitions for the campaign intake form.

This module defines the enumerations shared by the form runtime:
- Platform: Social platforms a campaign can run on
- Priority: Campaign priority levels
- RuleKind: Per-field validation rule kinds used by the rule tables
- FieldErrorCode: Codes attached to individual field errors
- OutcomeKind: Result categories of a submit attempt
- FormPhase: Phases of the submit lifecycle
- NotificationKind: Categories of user-facing notifications
"""

from enum import Enum


class Platform(str, Enum):
    """Platforms selectable on the form, one checkbox each."""
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    YOUTUBE = "youtube"


class Priority(str, Enum):
    """Campaign priority. An unset priority is the empty string on the wire."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RuleKind(str, Enum):
    """Validation rule kinds a field can be bound to in a rule table."""
    REQUIRED_LETTERS = "required_letters"
    OPTIONAL_LETTERS = "optional_letters"
    REQUIRED = "required"
    REQUIRED_ALPHANUMERIC = "required_alphanumeric"
    OPTIONAL_ALPHANUMERIC = "optional_alphanumeric"
    REQUIRED_NUMERIC = "required_numeric"
    OPTIONAL_NUMERIC = "optional_numeric"
    UNCONSTRAINED = "unconstrained"


class FieldErrorCode(str, Enum):
    """Validation error codes for individual field failures."""
    REQUIRED = "required"
    LETTERS_ONLY = "letters_only"
    LETTERS_AND_NUMBERS = "letters_and_numbers"
    NUMERIC = "numeric"
    DATE_ORDER = "date_order"
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"


class OutcomeKind(str, Enum):
    """Result of a single submit attempt."""
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    NETWORK_FAILED = "network_failed"


class FormPhase(str, Enum):
    """Submit lifecycle phases of a form session."""
    IDLE = "idle"
    SUBMITTING = "submitting"


class NotificationKind(str, Enum):
    """Categories of notifications shown to the user after a submit."""
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    SUBMISSION_FAILED = "submission_failed"


__all__ = [
    "Platform",
    "Priority",
    "RuleKind",
    "FieldErrorCode",
    "OutcomeKind",
    "FormPhase",
    "NotificationKind",
]

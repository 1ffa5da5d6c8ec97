"""Rule-table validation engine for the campaign intake form.

This module provides a ValidationEngine that checks a CampaignDraft against a
rule table (camelCase field name -> RuleKind) and produces a ValidationResult
with one FieldError per failing field.

Three rule tables are provided, matching the successive revisions of the form:

- NUMERIC_RULES: budget and followers must be digits when given
- ALPHANUMERIC_RULES: budget is required and alphanumeric, followers is
  required and numeric, influencer may contain letters and numbers
- LATEST_RULES (default): budget and followers are only required

Independently of the table, the engine checks the start/end date order and
the type and size of the attachment.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from dateutil.parser import isoparse

from campaignform.errors import ErrorSet, FieldError, UnknownFieldError, to_error_set
from campaignform.models import TEXT_FIELDS, Attachment, CampaignDraft
from campaignform.types import FieldErrorCode, RuleKind

RuleTable = Mapping[str, RuleKind]

NUMERIC_RULES: Dict[str, RuleKind] = {
    "campaignName": RuleKind.REQUIRED_LETTERS,
    "campaignType": RuleKind.REQUIRED_LETTERS,
    "brandName": RuleKind.REQUIRED_LETTERS,
    "niche": RuleKind.OPTIONAL_LETTERS,
    "influencer": RuleKind.OPTIONAL_LETTERS,
    "budget": RuleKind.OPTIONAL_NUMERIC,
    "followers": RuleKind.OPTIONAL_NUMERIC,
}

ALPHANUMERIC_RULES: Dict[str, RuleKind] = {
    "campaignName": RuleKind.REQUIRED_LETTERS,
    "campaignType": RuleKind.REQUIRED_LETTERS,
    "brandName": RuleKind.REQUIRED_LETTERS,
    "niche": RuleKind.OPTIONAL_LETTERS,
    "influencer": RuleKind.OPTIONAL_ALPHANUMERIC,
    "budget": RuleKind.REQUIRED_ALPHANUMERIC,
    "followers": RuleKind.REQUIRED_NUMERIC,
}

LATEST_RULES: Dict[str, RuleKind] = {
    "campaignName": RuleKind.REQUIRED_LETTERS,
    "campaignType": RuleKind.REQUIRED_LETTERS,
    "brandName": RuleKind.REQUIRED_LETTERS,
    "niche": RuleKind.OPTIONAL_LETTERS,
    "influencer": RuleKind.UNCONSTRAINED,
    "budget": RuleKind.REQUIRED,
    "followers": RuleKind.REQUIRED,
}

RULESETS: Dict[str, Dict[str, RuleKind]] = {
    "numeric": NUMERIC_RULES,
    "alphanumeric": ALPHANUMERIC_RULES,
    "latest": LATEST_RULES,
}

ALLOWED_CONTENT_TYPES: FrozenSet[str] = frozenset(
    {"image/jpeg", "image/png", "application/pdf", "text/csv"}
)
MAX_ATTACHMENT_BYTES = 2 * 1024 * 1024

DATE_ORDER_MESSAGE = "End date must be after start date."
UNSUPPORTED_TYPE_MESSAGE = "Only JPG, PNG, or PDF files are allowed."
TOO_LARGE_MESSAGE = "File size must be less than 2MB."

_LETTERS = re.compile(r"[A-Za-z\s]+")
_ALPHANUMERIC = re.compile(r"[A-Za-z0-9\s]+")
_NUMERIC = re.compile(r"[0-9]+")

# rule kind -> (required, pattern, failure code)
_RULE_SHAPES: Dict[RuleKind, Any] = {
    RuleKind.REQUIRED_LETTERS: (True, _LETTERS, FieldErrorCode.LETTERS_ONLY),
    RuleKind.OPTIONAL_LETTERS: (False, _LETTERS, FieldErrorCode.LETTERS_ONLY),
    RuleKind.REQUIRED: (True, None, None),
    RuleKind.REQUIRED_ALPHANUMERIC: (True, _ALPHANUMERIC, FieldErrorCode.LETTERS_AND_NUMBERS),
    RuleKind.OPTIONAL_ALPHANUMERIC: (False, _ALPHANUMERIC, FieldErrorCode.LETTERS_AND_NUMBERS),
    RuleKind.REQUIRED_NUMERIC: (True, _NUMERIC, FieldErrorCode.NUMERIC),
    RuleKind.OPTIONAL_NUMERIC: (False, _NUMERIC, FieldErrorCode.NUMERIC),
    RuleKind.UNCONSTRAINED: (False, None, None),
}

_FORMAT_SUFFIXES: Dict[FieldErrorCode, str] = {
    FieldErrorCode.LETTERS_ONLY: "must contain only letters.",
    FieldErrorCode.LETTERS_AND_NUMBERS: "must contain only letters and numbers.",
    FieldErrorCode.NUMERIC: "must be a valid number.",
}


def field_label(name: str) -> str:
    """Convert a camelCase field name to a spaced, title-cased label.

    Examples:
        >>> field_label("campaignName")
        'Campaign Name'
        >>> field_label("niche")
        'Niche'
    """
    spaced = re.sub(r"([A-Z])", r" \1", name)
    return spaced[:1].upper() + spaced[1:]


def _parse_date(value: str) -> Optional[datetime]:
    try:
        return isoparse(value)
    except (ValueError, OverflowError):
        return None


def dates_out_of_order(start: str, end: str) -> bool:
    """Return True when both dates are set and start is later than end.

    Values are compared chronologically when both parse as ISO 8601 with the
    same timezone awareness, and as plain strings otherwise.
    """
    if not start or not end:
        return False
    start_dt, end_dt = _parse_date(start), _parse_date(end)
    if (
        start_dt is not None
        and end_dt is not None
        and (start_dt.tzinfo is None) == (end_dt.tzinfo is None)
    ):
        return start_dt > end_dt
    return start > end


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a campaign draft.

    Attributes:
        is_valid: Whether the draft passed all checks
        errors: Field-level validation errors, in form order (empty if valid)

    Examples:
        >>> result = ValidationEngine().validate(CampaignDraft())
        >>> result.is_valid
        False
        >>> result.error_set["campaignName"]
        'Campaign Name is required.'
    """
    is_valid: bool
    errors: List[FieldError]

    @property
    def error_set(self) -> ErrorSet:
        """The errors as a field name -> message mapping."""
        return to_error_set(self.errors)

    @property
    def invalid_fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
        }


class ValidationEngine:
    """Validation engine for campaign drafts.

    The engine is pure: validate() never mutates the draft, never raises for a
    well-typed draft, and returns equal results for equal drafts.

    Attributes:
        rules: Rule table mapping camelCase field names to RuleKind
        allowed_content_types: MIME types accepted for the attachment
        max_attachment_bytes: Largest accepted attachment size

    Examples:
        >>> engine = ValidationEngine()
        >>> draft = CampaignDraft(
        ...     campaign_name="Summer Launch",
        ...     campaign_type="Awareness",
        ...     brand_name="Acme",
        ...     budget="5000",
        ...     followers="10k",
        ... )
        >>> engine.validate(draft).is_valid
        True

        >>> engine = ValidationEngine(NUMERIC_RULES)
        >>> engine.validate(draft).error_set
        {'followers': 'Followers must be a valid number.'}
    """

    def __init__(
        self,
        rules: Optional[RuleTable] = None,
        *,
        allowed_content_types: FrozenSet[str] = ALLOWED_CONTENT_TYPES,
        max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> None:
        """Initialize the engine.

        Args:
            rules: Rule table to apply. Defaults to LATEST_RULES.
            allowed_content_types: Accepted attachment MIME types
            max_attachment_bytes: Maximum attachment size in bytes

        Raises:
            UnknownFieldError: If the rule table names a field that is not a
                text field of the form
        """
        rules = dict(LATEST_RULES if rules is None else rules)
        for name, kind in rules.items():
            if name not in TEXT_FIELDS:
                raise UnknownFieldError(name)
            rules[name] = RuleKind(kind)
        self.rules = rules
        self.allowed_content_types = frozenset(allowed_content_types)
        self.max_attachment_bytes = max_attachment_bytes

    @classmethod
    def for_revision(cls, revision: str, **kwargs: Any) -> "ValidationEngine":
        """Build an engine from a named rule table ("numeric", "alphanumeric", "latest")."""
        try:
            rules = RULESETS[revision]
        except KeyError:
            raise ValueError(
                f"Unknown rule revision '{revision}'. "
                f"Known revisions: {', '.join(sorted(RULESETS))}"
            ) from None
        return cls(rules, **kwargs)

    def validate(self, draft: CampaignDraft) -> ValidationResult:
        """Validate a draft.

        Args:
            draft: The draft to check

        Returns:
            ValidationResult with is_valid flag and the errors in form order
        """
        errors: List[FieldError] = []

        for name in TEXT_FIELDS:
            kind = self.rules.get(name)
            if kind is None:
                continue
            error = self._check_text(name, draft.get(name), kind)
            if error is not None:
                errors.append(error)

        if dates_out_of_order(draft.start_date, draft.end_date):
            errors.append(
                FieldError(field="endDate", code=FieldErrorCode.DATE_ORDER, message=DATE_ORDER_MESSAGE)
            )

        if draft.attachment is not None:
            error = self._check_attachment(draft.attachment)
            if error is not None:
                errors.append(error)

        return ValidationResult(is_valid=not errors, errors=errors)

    def _check_text(self, name: str, value: str, kind: RuleKind) -> Optional[FieldError]:
        """Apply one rule kind to one text field value."""
        required, pattern, code = _RULE_SHAPES[kind]
        label = field_label(name)

        if not value.strip():
            if required:
                return FieldError(
                    field=name,
                    code=FieldErrorCode.REQUIRED,
                    message=f"{label} is required.",
                )
            return None

        if pattern is not None and not pattern.fullmatch(value):
            return FieldError(
                field=name,
                code=code,
                message=f"{label} {_FORMAT_SUFFIXES[code]}",
            )
        return None

    def _check_attachment(self, attachment: Attachment) -> Optional[FieldError]:
        """Type first; the size is only checked for an accepted type."""
        if attachment.content_type not in self.allowed_content_types:
            return FieldError(
                field="attachment",
                code=FieldErrorCode.UNSUPPORTED_TYPE,
                message=UNSUPPORTED_TYPE_MESSAGE,
            )
        if attachment.size > self.max_attachment_bytes:
            return FieldError(
                field="attachment",
                code=FieldErrorCode.TOO_LARGE,
                message=TOO_LARGE_MESSAGE,
            )
        return None


__all__ = [
    "RuleTable",
    "NUMERIC_RULES",
    "ALPHANUMERIC_RULES",
    "LATEST_RULES",
    "RULESETS",
    "ALLOWED_CONTENT_TYPES",
    "MAX_ATTACHMENT_BYTES",
    "field_label",
    "dates_out_of_order",
    "ValidationEngine",
    "ValidationResult",
]

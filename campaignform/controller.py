"""Submission controller: validate, serialize, post once.

The controller takes a draft snapshot and returns a SubmitOutcome. It never
raises for validation or network failures, and it never touches form state;
deciding what to do with the outcome is the caller's job.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

import httpx

from campaignform.errors import ErrorSet
from campaignform.models import CampaignDraft
from campaignform.serialization import encode_multipart
from campaignform.settings import WebhookSettings
from campaignform.types import OutcomeKind
from campaignform.validation import ValidationEngine

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODES = frozenset({200, 201})


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of one submit attempt.

    Attributes:
        kind: Success, validation failure, or network failure
        errors: ErrorSet of a validation failure (empty otherwise)
        reason: Description of a network failure
        status_code: HTTP status returned by the webhook, when one was received

    Examples:
        >>> SubmitOutcome.success(201).ok
        True
        >>> SubmitOutcome.network_failed("HTTP 500", status_code=500).kind
        <OutcomeKind.NETWORK_FAILED: 'network_failed'>
    """
    kind: OutcomeKind
    errors: ErrorSet = field(default_factory=dict)
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, status_code: Optional[int] = None) -> "SubmitOutcome":
        return cls(kind=OutcomeKind.SUCCESS, status_code=status_code)

    @classmethod
    def validation_failed(cls, errors: ErrorSet) -> "SubmitOutcome":
        return cls(kind=OutcomeKind.VALIDATION_FAILED, errors=dict(errors))

    @classmethod
    def network_failed(cls, reason: str, status_code: Optional[int] = None) -> "SubmitOutcome":
        return cls(kind=OutcomeKind.NETWORK_FAILED, reason=reason, status_code=status_code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"ok": self.ok, "kind": self.kind.value}
        if self.errors:
            result["errors"] = dict(self.errors)
        if self.reason is not None:
            result["reason"] = self.reason
        if self.status_code is not None:
            result["statusCode"] = self.status_code
        return result


class SubmissionController:
    """Orchestrates validate -> serialize -> POST for a single draft.

    At most one request is made per submit() call: there is no retry, no
    backoff, and no idempotency key.

    Attributes:
        settings: Webhook settings
        engine: Validation engine applied before any request

    Examples:
        >>> import asyncio
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> controller = SubmissionController(
        ...     WebhookSettings("https://hooks.example.com/campaigns"),
        ...     client=httpx.AsyncClient(transport=transport),
        ... )
        >>> asyncio.run(controller.submit(CampaignDraft())).kind
        <OutcomeKind.VALIDATION_FAILED: 'validation_failed'>
    """

    def __init__(
        self,
        settings: WebhookSettings,
        *,
        engine: Optional[ValidationEngine] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the controller.

        Args:
            settings: Webhook URL, timeout, and extra headers
            engine: Validation engine. Defaults to the latest rules.
            client: HTTP client to use. When omitted, the controller creates
                and owns one, and closes it in aclose().
        """
        self.settings = settings
        self.engine = engine or ValidationEngine()
        self._owns_client = client is None
        if client is None:
            client_kwargs: Dict[str, Any] = {}
            if settings.timeout is not None:
                client_kwargs["timeout"] = settings.timeout
            client = httpx.AsyncClient(**client_kwargs)
        self._client = client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SubmissionController":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def submit(
        self,
        draft: CampaignDraft,
        *,
        on_validated: Optional[Callable[[], None]] = None,
    ) -> SubmitOutcome:
        """Validate and post a draft.

        Args:
            draft: Immutable snapshot of the form
            on_validated: Called once the draft has passed validation, before
                the request is sent

        Returns:
            SubmitOutcome.success for HTTP 200/201, validation_failed when the
            draft has errors (no request is made), network_failed for any other
            status or a transport error
        """
        result = self.engine.validate(draft)
        if not result.is_valid:
            logger.info(f"Submission blocked by validation errors on: {', '.join(result.invalid_fields)}")
            return SubmitOutcome.validation_failed(result.error_set)

        if on_validated is not None:
            on_validated()

        url = self.settings.webhook_url
        logger.info(f"Posting campaign submission to {urlparse(url).netloc}")
        try:
            response = await self._client.post(
                url,
                files=encode_multipart(draft),
                headers=self.settings.headers or None,
            )
        except httpx.HTTPError as e:
            logger.error(f"Campaign submission failed: {e.__class__.__name__}: {e}")
            return SubmitOutcome.network_failed(f"{e.__class__.__name__}: {e}")

        if response.status_code in SUCCESS_STATUS_CODES:
            logger.info(f"Campaign submission accepted with status {response.status_code}")
            return SubmitOutcome.success(response.status_code)

        logger.error(f"Campaign submission rejected with status {response.status_code}")
        return SubmitOutcome.network_failed(
            f"Webhook responded with HTTP {response.status_code}",
            status_code=response.status_code,
        )


__all__ = [
    "SUCCESS_STATUS_CODES",
    "SubmitOutcome",
    "SubmissionController",
]

"""CampaignFormSession orchestrator for the campaign intake form.

The session is what a UI layer talks to. It coordinates the form state store,
the submit phase machine, the submission controller, and the notification
channel:

- field edits go to the store, clearing that field's error
- submit() snapshots the store, runs the controller, and applies the outcome:
  reset on success, show errors on validation failure, keep everything on a
  network failure
- exactly one notification is emitted per submit attempt

Usage:
    >>> from campaignform.settings import WebhookSettings
    >>> session = CampaignFormSession(WebhookSettings("https://hooks.example.com/campaigns"))
    >>> session.set_field("campaignName", "Summer Launch")
    >>> session.snapshot().campaign_name
    'Summer Launch'
"""

import logging
from typing import Optional

from campaignform.controller import SubmissionController, SubmitOutcome
from campaignform.errors import ErrorSet, SubmissionInProgressError
from campaignform.events import Notification, NotificationCenter
from campaignform.models import Attachment, CampaignDraft
from campaignform.settings import WebhookSettings
from campaignform.state_machine import FormPhaseMachine
from campaignform.store import FieldUpdate, FormStateStore
from campaignform.types import FormPhase, OutcomeKind, Platform

logger = logging.getLogger(__name__)


class CampaignFormSession:
    """One user's editing and submitting session for the campaign form.

    Attributes:
        settings: Webhook settings
        store: The form state
        notifications: Channel receiving one Notification per submit attempt

    Examples:
        >>> from campaignform.settings import WebhookSettings
        >>> session = CampaignFormSession(WebhookSettings("https://hooks.example.com/c"))
        >>> session.is_submitting
        False
        >>> session.errors
        {}
    """

    def __init__(
        self,
        settings: WebhookSettings,
        *,
        controller: Optional[SubmissionController] = None,
        store: Optional[FormStateStore] = None,
        notifications: Optional[NotificationCenter] = None,
    ):
        """Initialize the session.

        Args:
            settings: Webhook settings; used to build a controller if none is given
            controller: Submission controller to use
            store: Existing form state to continue editing
            notifications: Notification channel to emit outcomes on
        """
        self.settings = settings
        self.controller = controller or SubmissionController(settings)
        self.store = store or FormStateStore()
        self.notifications = notifications or NotificationCenter()
        self._phase = FormPhaseMachine()

    @property
    def is_submitting(self) -> bool:
        """True while a submit is in flight; the submit trigger should be disabled."""
        return self._phase.is_submitting

    @property
    def errors(self) -> ErrorSet:
        return self.store.errors

    def error_for(self, name: str) -> Optional[str]:
        """Inline error text for a field, or None if the field is valid."""
        return self.store.error_for(name)

    def apply(self, update: FieldUpdate) -> None:
        self.store.apply(update)

    def set_field(self, name: str, value: str) -> None:
        self.store.set_field(name, value)

    def set_platform(self, platform: Platform, checked: bool) -> None:
        self.store.set_platform(platform, checked)

    def set_attachment(self, attachment: Optional[Attachment]) -> None:
        self.store.set_attachment(attachment)

    def reset(self) -> None:
        self.store.reset()

    def snapshot(self) -> CampaignDraft:
        return self.store.snapshot()

    async def submit(self) -> SubmitOutcome:
        """Submit the current draft.

        Returns:
            The SubmitOutcome of this attempt

        Raises:
            SubmissionInProgressError: If a previous submit is still in flight
        """
        if not self._phase.can_transition_to(FormPhase.SUBMITTING):
            raise SubmissionInProgressError("A submission is already in progress")

        self._phase.transition_to(FormPhase.SUBMITTING)
        try:
            draft = self.store.snapshot()
            # inline errors of the previous attempt go away once this draft validates
            outcome = await self.controller.submit(draft, on_validated=self._clear_errors)
        finally:
            self._phase.transition_to(FormPhase.IDLE)

        self._apply_outcome(outcome)
        return outcome

    def _clear_errors(self) -> None:
        self.store.replace_errors({})

    def _apply_outcome(self, outcome: SubmitOutcome) -> None:
        """Update the store and notify listeners for one outcome."""
        if outcome.kind is OutcomeKind.SUCCESS:
            self.store.reset()
            notification = Notification.success()
        elif outcome.kind is OutcomeKind.VALIDATION_FAILED:
            self.store.replace_errors(outcome.errors)
            notification = Notification.validation_failed(outcome.errors)
        else:
            notification = Notification.submission_failed(outcome.status_code)

        logger.info(f"Submit attempt finished: {outcome.kind.value}")
        self.notifications.emit(notification)

    async def aclose(self) -> None:
        await self.controller.aclose()

    async def __aenter__(self) -> "CampaignFormSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


__all__ = [
    "CampaignFormSession",
]

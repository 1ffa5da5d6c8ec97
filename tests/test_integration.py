"""Integration tests for complete form sessions.

Tests cover end-to-end scenarios combining:
- Field edits through the session
- Validation on submit and inline errors
- Webhook submission through a mock transport
- Reset on success, state preserved on failure
- Notifications emitted per attempt
- Guard against overlapping submits
"""

import asyncio
from dataclasses import replace

import httpx
import pytest

from campaignform.errors import SubmissionInProgressError
from campaignform.events import NotificationCenter
from campaignform.models import Attachment, empty_draft
from campaignform.runtime import CampaignFormSession
from campaignform.store import FormStateStore
from campaignform.types import NotificationKind, OutcomeKind, Platform
from tests.conftest import RecordingHandler


def make_session(settings, make_controller, handler, draft=None):
    """Session pre-filled with a draft, collecting its notifications in a list."""
    notifications = NotificationCenter()
    received = []
    notifications.on_any(received.append)
    session = CampaignFormSession(
        settings,
        controller=make_controller(handler),
        store=FormStateStore(draft),
        notifications=notifications,
    )
    return session, received


class TestScenarios:
    """The reference scenarios for the form."""

    @pytest.mark.asyncio
    async def test_missing_campaign_name(self, settings, make_controller, valid_draft):
        """Blank campaign name blocks submission with a single inline error."""
        handler = RecordingHandler()
        session, received = make_session(
            settings, make_controller, handler, replace(valid_draft, campaign_name="")
        )

        outcome = await session.submit()

        assert outcome.kind == OutcomeKind.VALIDATION_FAILED
        assert session.errors == {"campaignName": "Campaign Name is required."}
        assert session.error_for("campaignName") == "Campaign Name is required."
        assert handler.requests == []
        assert [n.kind for n in received] == [NotificationKind.VALIDATION_FAILED]
        assert received[0].errors == session.errors

    @pytest.mark.asyncio
    async def test_digit_in_campaign_name(self, settings, make_controller, valid_draft):
        session, _ = make_session(
            settings, make_controller, RecordingHandler(), replace(valid_draft, campaign_name="Acme 2")
        )

        await session.submit()

        assert session.errors["campaignName"] == "Campaign Name must contain only letters."

    @pytest.mark.asyncio
    async def test_end_before_start(self, settings, make_controller, valid_draft):
        draft = replace(valid_draft, start_date="2025-06-01", end_date="2025-05-01")
        session, _ = make_session(settings, make_controller, RecordingHandler(), draft)

        await session.submit()

        assert session.errors == {"endDate": "End date must be after start date."}

    @pytest.mark.asyncio
    async def test_oversized_png(self, settings, make_controller, valid_draft):
        attachment = Attachment(
            filename="banner.png", content_type="image/png", content=b"\0" * (3 * 1024 * 1024)
        )
        handler = RecordingHandler()
        session, _ = make_session(
            settings, make_controller, handler, replace(valid_draft, attachment=attachment)
        )

        outcome = await session.submit()

        assert outcome.kind == OutcomeKind.VALIDATION_FAILED
        assert session.errors == {"attachment": "File size must be less than 2MB."}
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_success_resets_form(self, settings, make_controller, valid_draft):
        handler = RecordingHandler(200)
        session, received = make_session(settings, make_controller, handler, valid_draft)
        session.set_platform(Platform.INSTAGRAM, True)

        outcome = await session.submit()

        assert outcome.ok is True
        assert len(handler.requests) == 1
        assert session.snapshot() == empty_draft()
        assert session.errors == {}
        assert [n.kind for n in received] == [NotificationKind.SUCCESS]

    @pytest.mark.asyncio
    async def test_connection_error_keeps_form(self, settings, make_controller, valid_draft):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        session, received = make_session(settings, make_controller, handler, valid_draft)
        before = session.snapshot()

        outcome = await session.submit()

        assert outcome.kind == OutcomeKind.NETWORK_FAILED
        assert session.snapshot() == before
        assert session.errors == {}
        assert [n.kind for n in received] == [NotificationKind.SUBMISSION_FAILED]
        assert session.is_submitting is False


class TestRecovery:
    """Test correcting and resubmitting after failures."""

    @pytest.mark.asyncio
    async def test_fix_and_resubmit(self, settings, make_controller, valid_draft):
        handler = RecordingHandler(201)
        draft = replace(valid_draft, campaign_name="", budget="")
        session, received = make_session(settings, make_controller, handler, draft)

        await session.submit()
        assert set(session.errors) == {"campaignName", "budget"}

        session.set_field("campaignName", "Summer Launch")
        assert set(session.errors) == {"budget"}

        session.set_field("budget", "2500")
        outcome = await session.submit()

        assert outcome.ok is True
        assert len(handler.requests) == 1
        assert b"2500" in handler.requests[0].content
        assert [n.kind for n in received] == [
            NotificationKind.VALIDATION_FAILED,
            NotificationKind.SUCCESS,
        ]

    @pytest.mark.asyncio
    async def test_server_rejection_then_retry(self, settings, make_controller, valid_draft):
        handler = RecordingHandler(500)
        session, received = make_session(settings, make_controller, handler, valid_draft)

        outcome = await session.submit()
        assert outcome.status_code == 500
        assert received[-1].message.endswith("(HTTP 500)")
        assert session.snapshot() == valid_draft

        handler.status_code = 200
        outcome = await session.submit()

        assert outcome.ok is True
        assert len(handler.requests) == 2
        assert session.snapshot() == empty_draft()

    @pytest.mark.asyncio
    async def test_stale_errors_recomputed(self, settings, make_controller, valid_draft):
        """Errors from an earlier attempt do not survive a later clean attempt."""
        handler = RecordingHandler(503)
        draft = replace(valid_draft, start_date="2025-06-01", end_date="2025-05-01")
        session, _ = make_session(settings, make_controller, handler, draft)

        await session.submit()
        assert session.errors == {"endDate": "End date must be after start date."}

        # fixing the start date leaves the endDate error in place until resubmit
        session.set_field("startDate", "2025-04-01")
        assert "endDate" in session.errors

        outcome = await session.submit()

        assert outcome.kind == OutcomeKind.NETWORK_FAILED
        assert session.errors == {}


class TestInFlightSubmission:
    """Test behaviour while a submit is awaiting the webhook."""

    @pytest.mark.asyncio
    async def test_second_submit_rejected_and_edits_isolated(
        self, settings, make_controller, valid_draft
    ):
        release = asyncio.Event()
        requests = []

        async def handler(request):
            requests.append(request)
            await release.wait()
            return httpx.Response(200)

        session, _ = make_session(settings, make_controller, handler, valid_draft)

        task = asyncio.create_task(session.submit())
        await asyncio.sleep(0)
        assert session.is_submitting is True

        with pytest.raises(SubmissionInProgressError):
            await session.submit()

        session.set_field("campaignName", "Edited Meanwhile")
        release.set()
        outcome = await task

        assert outcome.ok is True
        assert len(requests) == 1
        assert b"Summer Launch" in requests[0].content
        assert b"Edited Meanwhile" not in requests[0].content
        assert session.is_submitting is False

    @pytest.mark.asyncio
    async def test_stale_errors_cleared_before_request(self, settings, make_controller, valid_draft):
        """Inline errors of an earlier attempt disappear as soon as the new draft validates."""
        release = asyncio.Event()

        async def handler(request):
            await release.wait()
            return httpx.Response(500)

        draft = replace(valid_draft, start_date="2025-06-01", end_date="2025-05-01")
        session, _ = make_session(settings, make_controller, handler, draft)

        await session.submit()
        session.set_field("startDate", "2025-04-01")
        assert "endDate" in session.errors

        task = asyncio.create_task(session.submit())
        await asyncio.sleep(0)

        assert session.is_submitting is True
        assert session.errors == {}

        release.set()
        outcome = await task

        assert outcome.status_code == 500
        assert session.errors == {}

    @pytest.mark.asyncio
    async def test_phase_released_after_unexpected_error(self, settings, valid_draft):
        class ExplodingController:
            async def submit(self, draft, on_validated=None):
                raise RuntimeError("boom")

            async def aclose(self):
                pass

        session = CampaignFormSession(
            settings, controller=ExplodingController(), store=FormStateStore(valid_draft)
        )

        with pytest.raises(RuntimeError, match="boom"):
            await session.submit()

        assert session.is_submitting is False
        assert session.snapshot() == valid_draft


class TestSessionEdits:
    """Test field edits through the session."""

    def test_edits_reach_store(self, settings):
        session = CampaignFormSession(settings)
        session.set_field("campaignName", "Launch")
        session.set_platform(Platform.FACEBOOK, True)

        draft = session.snapshot()
        assert draft.campaign_name == "Launch"
        assert draft.platform.facebook is True

    def test_reset(self, settings, valid_draft):
        session = CampaignFormSession(settings, store=FormStateStore(valid_draft))
        session.reset()
        assert session.snapshot() == empty_draft()

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_controller(self, settings):
        async with CampaignFormSession(settings) as session:
            pass

        assert session.controller._client.is_closed is True

"""Shared fixtures for the campaign form test suite."""

from typing import Callable, List

import httpx
import pytest

from campaignform.controller import SubmissionController
from campaignform.models import Attachment, CampaignDraft
from campaignform.settings import WebhookSettings

WEBHOOK_URL = "https://hooks.example.com/campaigns"


@pytest.fixture
def settings() -> WebhookSettings:
    return WebhookSettings(WEBHOOK_URL)


@pytest.fixture
def valid_draft() -> CampaignDraft:
    """A draft that passes every rule table."""
    return CampaignDraft(
        campaign_name="Summer Launch",
        campaign_type="Brand Awareness",
        brand_name="Acme",
        niche="Fitness",
        budget="5000",
        deliverables="3 reels, 2 stories",
        followers="10000",
        start_date="2025-05-01",
        end_date="2025-06-01",
        priority="high",
        notes="Focus on the new product line.",
    )


@pytest.fixture
def pdf_attachment() -> Attachment:
    return Attachment(filename="brief.pdf", content_type="application/pdf", content=b"%PDF-1.4 brief")


class RecordingHandler:
    """MockTransport handler that records requests and replies with a fixed status."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"received": True})


@pytest.fixture
def make_controller(settings) -> Callable[..., SubmissionController]:
    """Build a controller whose HTTP client is backed by the given handler."""

    def _make(handler, **kwargs) -> SubmissionController:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SubmissionController(settings, client=client, **kwargs)

    return _make

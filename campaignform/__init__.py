"""Campaign intake form runtime.

campaignform is a headless runtime for a marketing-campaign intake form:
- Immutable campaign draft record with a JSON Schema for its wire form
- Rule-table validation engine with per-field, human-readable errors
- Form state store with explicit, typed field updates
- Submission controller posting one multipart request to a webhook
- Notification channel reporting the outcome of every submit attempt

Basic usage:
    >>> from campaignform import CampaignFormSession, WebhookSettings
    >>> session = CampaignFormSession(WebhookSettings("https://hooks.example.com/campaigns"))
    >>> session.set_field("campaignName", "")
    >>> session.snapshot().campaign_name
    ''
"""

__version__ = "0.1.0"
__author__ = "Campaign Form Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from campaignform.controller import SubmissionController, SubmitOutcome
from campaignform.models import Attachment, CampaignDraft, empty_draft
from campaignform.runtime import CampaignFormSession
from campaignform.settings import WebhookSettings
from campaignform.validation import ValidationEngine

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "Attachment",
    "CampaignDraft",
    "CampaignFormSession",
    "SubmissionController",
    "SubmitOutcome",
    "ValidationEngine",
    "WebhookSettings",
    "empty_draft",
]

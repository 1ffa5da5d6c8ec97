"""Webhook configuration for campaign submissions.

The endpoint URL is the only external configuration point of the form. It is
passed in explicitly; nothing is read from the environment or from files.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlparse

from campaignform.errors import ConfigurationError

DEFAULT_WEBHOOK_URL = "https://n8n.srv903939.hstgr.cloud/webhook/d9e67f53-dbf7-4886-946d-ba1c51553e99"


@dataclass(frozen=True)
class WebhookSettings:
    """Where and how campaign submissions are posted.

    Attributes:
        webhook_url: Absolute http(s) URL receiving the POST
        timeout: Request timeout in seconds. None keeps the HTTP client default.
        headers: Extra request headers (e.g., an auth token expected by the webhook)

    Examples:
        >>> settings = WebhookSettings("https://hooks.example.com/campaigns")
        >>> settings.timeout is None
        True
    """
    webhook_url: str
    timeout: Optional[float] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        parsed = urlparse(self.webhook_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Webhook URL must be an absolute http(s) URL, got {self.webhook_url!r}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout!r}")

    @classmethod
    def default(cls) -> "WebhookSettings":
        """Settings pointing at the production campaign webhook."""
        return cls(webhook_url=DEFAULT_WEBHOOK_URL)


__all__ = [
    "DEFAULT_WEBHOOK_URL",
    "WebhookSettings",
]

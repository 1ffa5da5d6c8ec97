"""Notification channel for submit outcomes.

After every submit attempt the session emits exactly one Notification. A UI
subscribes to the NotificationCenter and shows it as a toast, alert, status
line, or whatever fits; per-field messages are carried along so inline error
text can be rendered from the same event.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from campaignform.errors import ErrorSet
from campaignform.types import NotificationKind

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Campaign submitted successfully!"
VALIDATION_FAILED_MESSAGE = "Please fix the highlighted errors before submitting."
SUBMISSION_FAILED_MESSAGE = "There was an error submitting the form. Please try again."


@dataclass(frozen=True)
class Notification:
    """A user-facing message about the outcome of a submit.

    Attributes:
        kind: Outcome category
        message: Text to show to the user
        errors: Per-field messages (only set for validation failures)
        status_code: HTTP status of a rejected submission, when known

    Examples:
        >>> note = Notification.submission_failed(status_code=503)
        >>> note.message
        'There was an error submitting the form. Please try again. (HTTP 503)'
    """
    kind: NotificationKind
    message: str
    errors: ErrorSet = field(default_factory=dict)
    status_code: Optional[int] = None

    @classmethod
    def success(cls) -> "Notification":
        return cls(kind=NotificationKind.SUCCESS, message=SUCCESS_MESSAGE)

    @classmethod
    def validation_failed(cls, errors: ErrorSet) -> "Notification":
        return cls(
            kind=NotificationKind.VALIDATION_FAILED,
            message=VALIDATION_FAILED_MESSAGE,
            errors=dict(errors),
        )

    @classmethod
    def submission_failed(cls, status_code: Optional[int] = None) -> "Notification":
        message = SUBMISSION_FAILED_MESSAGE
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        return cls(kind=NotificationKind.SUBMISSION_FAILED, message=message, status_code=status_code)

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {"kind": self.kind.value, "message": self.message}
        if self.errors:
            result["errors"] = dict(self.errors)
        if self.status_code is not None:
            result["statusCode"] = self.status_code
        return result


NotificationListener = Callable[[Notification], None]
"""Type alias for notification listener callbacks.

Listeners are called synchronously, in registration order.
"""


class NotificationCenter:
    """Dispatches notifications to subscribed listeners.

    Features:
    - Kind-specific subscriptions
    - Wildcard subscriptions (all notifications)
    - Synchronous dispatch in registration order
    - Error isolation: a raising listener is logged and skipped

    Examples:
        >>> center = NotificationCenter()
        >>> seen = []
        >>> center.on(NotificationKind.SUCCESS, seen.append)
        >>> center.emit(Notification.success())
        >>> seen[0].message
        'Campaign submitted successfully!'
    """

    def __init__(self):
        self._listeners: Dict[NotificationKind, List[NotificationListener]] = {}
        self._any_listeners: List[NotificationListener] = []

    def on(self, kind: NotificationKind, listener: NotificationListener) -> None:
        """Subscribe to one notification kind."""
        self._listeners.setdefault(kind, []).append(listener)

    def on_any(self, listener: NotificationListener) -> None:
        """Subscribe to all notifications."""
        self._any_listeners.append(listener)

    def off(self, kind: NotificationKind, listener: NotificationListener) -> None:
        """Unsubscribe from one notification kind. Unknown listeners are ignored."""
        listeners = self._listeners.get(kind, [])
        if listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: NotificationListener) -> None:
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, notification: Notification) -> None:
        """Dispatch a notification.

        Kind-specific listeners run first, then wildcard listeners. Exceptions
        raised by a listener are logged and do not reach the caller.
        """
        listeners = list(self._listeners.get(notification.kind, [])) + list(self._any_listeners)
        for listener in listeners:
            try:
                listener(notification)
            except Exception:
                logger.exception(
                    f"Notification listener {listener!r} failed on {notification.kind.value}"
                )

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()
        self._any_listeners.clear()

    def listener_count(self, kind: Optional[NotificationKind] = None) -> int:
        """Count listeners for one kind, or all listeners including wildcards."""
        if kind is not None:
            return len(self._listeners.get(kind, []))
        return len(self._any_listeners) + sum(len(v) for v in self._listeners.values())


__all__ = [
    "SUCCESS_MESSAGE",
    "VALIDATION_FAILED_MESSAGE",
    "SUBMISSION_FAILED_MESSAGE",
    "Notification",
    "NotificationListener",
    "NotificationCenter",
]

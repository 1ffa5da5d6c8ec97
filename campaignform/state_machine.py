"""Submit phase state machine for a campaign form session.

A form session is either idle (editable, submit allowed) or submitting (one
request in flight). The machine enforces that a second submit cannot start
while the first one is still running, which is how the UI's submit button is
kept disabled for the duration of a request.

Usage:
    >>> sm = FormPhaseMachine()
    >>> sm.phase
    <FormPhase.IDLE: 'idle'>
    >>> sm.transition_to(FormPhase.SUBMITTING)
    >>> sm.can_transition_to(FormPhase.SUBMITTING)
    False
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from campaignform.types import FormPhase

logger = logging.getLogger(__name__)


class InvalidPhaseTransitionError(Exception):
    """Raised when attempting an invalid phase transition.

    Attributes:
        current_phase: The phase before the attempted transition
        target_phase: The phase that was attempted
    """

    def __init__(self, current_phase: FormPhase, target_phase: FormPhase, message: str):
        self.current_phase = current_phase
        self.target_phase = target_phase
        super().__init__(message)


VALID_TRANSITIONS: Dict[FormPhase, Set[FormPhase]] = {
    FormPhase.IDLE: {FormPhase.SUBMITTING},
    FormPhase.SUBMITTING: {FormPhase.IDLE},
}


@dataclass
class FormPhaseMachine:
    """Tracks the submit phase of one form session.

    Attributes:
        phase: Current phase
    """

    phase: FormPhase = FormPhase.IDLE
    _history: List[Tuple[FormPhase, FormPhase]] = field(default_factory=list, init=False, repr=False)

    def can_transition_to(self, target_phase: FormPhase) -> bool:
        return target_phase in VALID_TRANSITIONS.get(self.phase, set())

    def transition_to(self, target_phase: FormPhase) -> None:
        """Move to a new phase.

        Raises:
            InvalidPhaseTransitionError: If the transition is not allowed
        """
        if not self.can_transition_to(target_phase):
            raise InvalidPhaseTransitionError(
                current_phase=self.phase,
                target_phase=target_phase,
                message=(
                    f"Invalid phase transition: cannot transition from "
                    f"'{self.phase.value}' to '{target_phase.value}'"
                ),
            )
        old_phase = self.phase
        self.phase = target_phase
        self._history.append((old_phase, target_phase))
        logger.debug(f"Form phase {old_phase.value} -> {target_phase.value}")

    @property
    def is_submitting(self) -> bool:
        return self.phase is FormPhase.SUBMITTING

    def get_history(self) -> List[Tuple[FormPhase, FormPhase]]:
        """Return the (from, to) pairs of all transitions so far."""
        return list(self._history)


__all__ = [
    "FormPhaseMachine",
    "InvalidPhaseTransitionError",
    "VALID_TRANSITIONS",
]

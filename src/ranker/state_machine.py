"""State machine for a single running task resolution."""

from enum import Enum

import structlog

from src.ranker.constants import COMPONENT_RANKER
from src.ranker.errors import RankerError


logger = structlog.get_logger()


class RankerState(str, Enum):
    """Phase of one resolve call.

    - QUERY_READY: Query validated, nothing traversed yet
    - TASKS_COLLECTED: Every leaf task has been admitted or skipped
    - RESULTS_DRAINED: Result records emitted in rank order
    """

    QUERY_READY = "QUERY_READY"
    TASKS_COLLECTED = "TASKS_COLLECTED"
    RESULTS_DRAINED = "RESULTS_DRAINED"


# Valid state transitions
_VALID_TRANSITIONS: dict[RankerState, set[RankerState]] = {
    RankerState.QUERY_READY: {RankerState.TASKS_COLLECTED},
    RankerState.TASKS_COLLECTED: {RankerState.RESULTS_DRAINED},
    RankerState.RESULTS_DRAINED: set(),  # Terminal state
}


class RankerStateTransitionError(RankerError):
    """Raised when resolve phases run out of order."""

    def __init__(
        self,
        call_id: str,
        from_state: RankerState,
        to_state: RankerState,
    ) -> None:
        """Initialize the transition error.

        Args:
            call_id: Identifier of the resolve call.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.call_id = call_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal ranker state transition for call '{call_id}': "
            f"{from_state.value} -> {to_state.value}"
        )


class RankerStateMachine:
    """Tracks the phases of one resolve call.

    A fresh machine is created per call, so no phase state outlives the
    call that produced it.
    """

    def __init__(
        self,
        call_id: str,
        initial_state: RankerState = RankerState.QUERY_READY,
    ) -> None:
        """Initialize the state machine.

        Args:
            call_id: Identifier of the resolve call.
            initial_state: Starting state.
        """
        self._call_id = call_id
        self._state = initial_state
        self._log = logger.bind(component=COMPONENT_RANKER, call_id=call_id)

    @property
    def call_id(self) -> str:
        """Get the call identifier."""
        return self._call_id

    @property
    def state(self) -> RankerState:
        """Get the current state."""
        return self._state

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state == RankerState.RESULTS_DRAINED

    def can_transition_to(self, target: RankerState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: RankerState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            RankerStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_ranker_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise RankerStateTransitionError(
                call_id=self._call_id,
                from_state=self._state,
                to_state=target,
            )

        old_state = self._state
        self._state = target
        self._log.debug(
            "ranker_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def to_tasks_collected(self) -> None:
        """Transition to TASKS_COLLECTED state."""
        self.transition_to(RankerState.TASKS_COLLECTED)

    def to_results_drained(self) -> None:
        """Transition to RESULTS_DRAINED state."""
        self.transition_to(RankerState.RESULTS_DRAINED)

"""Form state machine with transition validation."""

from __future__ import annotations

from enum import Enum

from employee_editor.errors import InvalidTransitionError


class FormState(str, Enum):
    """Lifecycle of one visit to the edit screen."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    DONE = "done"


class FormEvent(str, Enum):
    """Events that move the form between states."""

    ACTIVATE = "activate"
    LOAD_SUCCEEDED = "load_succeeded"
    LOAD_FAILED = "load_failed"
    SUBMIT = "submit"
    SAVE_SUCCEEDED = "save_succeeded"
    SAVE_FAILED = "save_failed"


class FormStateMachine:
    """State machine for the employee edit form.

    Allowed transitions:
    - idle → loading (activate)
    - loading → ready (list loaded, or list failed)
    - ready → submitting (validated submit)
    - submitting → done (update accepted)
    - submitting → ready (update rejected)
    """

    # {(from_state, event): to_state}
    TRANSITIONS: dict[tuple[FormState, FormEvent], FormState] = {
        (FormState.IDLE, FormEvent.ACTIVATE): FormState.LOADING,
        (FormState.LOADING, FormEvent.LOAD_SUCCEEDED): FormState.READY,
        (FormState.LOADING, FormEvent.LOAD_FAILED): FormState.READY,
        (FormState.READY, FormEvent.SUBMIT): FormState.SUBMITTING,
        (FormState.SUBMITTING, FormEvent.SAVE_SUCCEEDED): FormState.DONE,
        (FormState.SUBMITTING, FormEvent.SAVE_FAILED): FormState.READY,
    }

    # States where the operator may select records and edit the draft
    EDITABLE = {FormState.READY}

    # States where a store call is outstanding
    BUSY = {FormState.LOADING, FormState.SUBMITTING}

    @classmethod
    def can_handle(cls, state: str, event: str) -> bool:
        """Check if an event is valid in a state."""
        return (FormState(state), FormEvent(event)) in cls.TRANSITIONS

    @classmethod
    def transition(cls, state: str, event: str) -> FormState:
        """Return the state reached by applying event, or raise."""
        try:
            return cls.TRANSITIONS[(FormState(state), FormEvent(event))]
        except (KeyError, ValueError):
            raise InvalidTransitionError(
                getattr(state, "value", state), getattr(event, "value", event)
            ) from None

    @classmethod
    def can_edit(cls, state: str) -> bool:
        """Check if selection and draft edits are allowed in this state."""
        return state in cls.EDITABLE

    @classmethod
    def is_busy(cls, state: str) -> bool:
        """Check if a store call is in flight in this state."""
        return state in cls.BUSY

    @classmethod
    def get_events(cls, state: str) -> list[FormEvent]:
        """Get events accepted in a state."""
        return [event for (from_state, event) in cls.TRANSITIONS if from_state == state]


def transition(state: FormState, event: FormEvent) -> FormState:
    """Pure (state, event) -> state mapping."""
    return FormStateMachine.transition(state, event)

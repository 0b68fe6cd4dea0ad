"""Deterministic trigger/guard transition table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class FlowContext(Generic[TState]):
    """Transition execution context."""

    trigger: str
    source: TState
    target: TState
    payload: object | None = None


TransitionGuard = Callable[[FlowContext[TState]], bool]
TransitionHook = Callable[[FlowContext[TState]], None]


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """One transition definition; ``source=None`` matches any state."""

    trigger: str
    source: TState | None
    target: TState
    guard: TransitionGuard[TState] | None = None
    after: TransitionHook[TState] | None = None


class FlowMachine(Generic[TState]):
    """Stateful executor over an ordered transition table."""

    def __init__(
        self,
        initial_state: TState,
        transitions: tuple[FlowTransition[TState], ...] = (),
    ) -> None:
        self._state = initial_state
        self._transitions = transitions

    @property
    def state(self) -> TState:
        return self._state

    def can_trigger(self, event: str, *, payload: object | None = None) -> bool:
        """Return whether a trigger would change state, without applying it."""
        return self._match(event, payload) is not None

    def trigger(self, event: str, *, payload: object | None = None) -> bool:
        """Execute first matching transition. Returns whether state changed."""
        match = self._match(event, payload)
        if match is None:
            return False
        transition, context = match
        self._state = transition.target
        if transition.after is not None:
            transition.after(context)
        return True

    def _match(
        self, event: str, payload: object | None
    ) -> tuple[FlowTransition[TState], FlowContext[TState]] | None:
        for transition in self._transitions:
            if transition.trigger != event:
                continue
            if transition.source is not None and transition.source != self._state:
                continue
            context = FlowContext(
                trigger=event,
                source=self._state,
                target=transition.target,
                payload=payload,
            )
            if transition.guard is not None and not transition.guard(context):
                continue
            return transition, context
        return None

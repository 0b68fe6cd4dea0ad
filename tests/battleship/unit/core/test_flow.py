from __future__ import annotations

from dataclasses import dataclass

from battleship.game.core.flow import FlowContext, FlowMachine, FlowTransition


@dataclass(frozen=True, slots=True)
class _Payload:
    value: int


def test_flow_machine_transitions_on_matching_trigger() -> None:
    machine = FlowMachine("setup", (FlowTransition(trigger="start", source="setup", target="battle"),))
    assert machine.trigger("start")
    assert machine.state == "battle"
    assert not machine.trigger("start")


def test_flow_machine_respects_guard_and_after_hook() -> None:
    after: list[str] = []

    def guard(context: FlowContext[str]) -> bool:
        payload = context.payload
        return isinstance(payload, _Payload) and payload.value > 0

    def after_hook(context: FlowContext[str]) -> None:
        after.append(f"{context.source}->{context.target}")

    machine = FlowMachine(
        "setup",
        (FlowTransition(trigger="start", source="setup", target="battle", guard=guard, after=after_hook),),
    )

    assert not machine.can_trigger("start", payload=_Payload(0))
    assert not machine.trigger("start", payload=_Payload(0))
    assert machine.state == "setup"
    assert machine.can_trigger("start", payload=_Payload(1))
    assert machine.state == "setup"
    assert machine.trigger("start", payload=_Payload(1))
    assert machine.state == "battle"
    assert after == ["setup->battle"]


def test_flow_machine_supports_wildcard_source() -> None:
    machine = FlowMachine("battle", (FlowTransition(trigger="reset", source=None, target="setup"),))
    assert machine.trigger("reset")
    assert machine.state == "setup"

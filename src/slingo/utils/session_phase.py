from __future__ import annotations

from esper import World

from slingo.components.game_session import GameSession, SessionPhase
from slingo.events.bus import EVENT_SESSION_PHASE_CHANGED, EventBus
from slingo.utils.singletons import get_session


def set_session_phase(world: World, event_bus: EventBus, phase: SessionPhase) -> None:
    """Move the session to phase and emit a change event when it differs."""

    session: GameSession = get_session(world)
    previous_phase = session.phase
    if previous_phase == phase:
        return
    session.phase = phase
    if phase == SessionPhase.TERMINAL:
        session.game_active = False
    event_bus.emit(
        EVENT_SESSION_PHASE_CHANGED,
        previous_phase=previous_phase,
        new_phase=phase,
    )

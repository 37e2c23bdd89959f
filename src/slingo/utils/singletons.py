from typing import Callable, Type, TypeVar

from esper import World

from slingo.components.board import Board
from slingo.components.card_state import CardState
from slingo.components.game_session import GameSession
from slingo.components.pending_selection import PendingSelection
from slingo.components.session_flags import SessionFlags

T = TypeVar("T")


def get_or_create(world: World, component_type: Type[T], factory: Callable[[], T] | None = None) -> T:
    """Return the shared component of component_type, creating it if absent."""
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    component = factory() if factory is not None else component_type()
    world.create_entity(component)
    return component


def get_singleton(world: World, component_type: Type[T]) -> T:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found")


def get_board(world: World) -> Board:
    return get_singleton(world, Board)


def get_card_state(world: World) -> CardState:
    return get_or_create(world, CardState)


def get_session(world: World) -> GameSession:
    return get_or_create(world, GameSession)


def get_pending(world: World) -> PendingSelection:
    return get_or_create(world, PendingSelection)


def get_flags(world: World) -> SessionFlags:
    return get_or_create(world, SessionFlags)

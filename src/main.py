"""Entry point for the Slingo prototype.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color, key

from slingo.world import create_world
from slingo.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_MOUSE_PRESS,
    EVENT_SPIN_REQUEST,
    EVENT_NEW_GAME_REQUEST,
    EVENT_AUTO_PLAY_TOGGLE,
)
from slingo.systems.auto_play_system import AutoPlaySystem, greedy_selection
from slingo.systems.bonus_collector_system import BonusCollectorSystem
from slingo.systems.game_session_system import GameSessionSystem
from slingo.systems.input import InputSystem
from slingo.systems.play_counter_system import PlayCounterSystem
from slingo.systems.render import RenderSystem


class SlingoWindow(Window):
    def __init__(self):
        super().__init__(800, 600, "Slingo")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Progression
        self.play_counter_system = PlayCounterSystem(self.world)

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self)

        # Collaborators subscribe before the first game starts so they see its events.
        self.bonus_collector_system = BonusCollectorSystem(self.world, self.event_bus)
        self.game_session_system = GameSessionSystem(
            self.world,
            self.event_bus,
            counter_provider=self.play_counter_system.next_counter,
        )
        self.auto_play_system = AutoPlaySystem(self.world, self.event_bus, resolver=greedy_selection)

        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.SPACE:
            self.event_bus.emit(EVENT_SPIN_REQUEST, source="keyboard")
        elif symbol == key.A:
            self.event_bus.emit(EVENT_AUTO_PLAY_TOGGLE, active=None)
        elif symbol == key.N:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = SlingoWindow()
    run()

if __name__ == "__main__":
    main()

from slingo.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_CELL_CLICK,
    EVENT_SPIN_REQUEST,
)
from slingo.ui.layout import cell_at_point, point_in_rect, spin_button_rect

# Arcade's left mouse button id.
MOUSE_BUTTON_LEFT = 1

class InputSystem:
    """Translates raw mouse presses into cell clicks and spin requests.

    Selection validity is decided by GameSessionSystem; this system only maps
    screen coordinates to board coordinates.
    """
    def __init__(self, event_bus: EventBus, window):
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        width, height = self.window.width, self.window.height
        if point_in_rect(x, y, spin_button_rect(width, height)):
            self.event_bus.emit(EVENT_SPIN_REQUEST, source="button")
            return
        cell = cell_at_point(x, y, width, height)
        if cell is None:
            return
        self.event_bus.emit(EVENT_CELL_CLICK, row=cell[0], col=cell[1])

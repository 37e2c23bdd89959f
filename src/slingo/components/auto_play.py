from dataclasses import dataclass


@dataclass(slots=True)
class AutoPlayState:
    """Tracks the automatic spin loop.

    elapsed accumulates tick time since the last automatic action.
    """
    active: bool = False
    elapsed: float = 0.0

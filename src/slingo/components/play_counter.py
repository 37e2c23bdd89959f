from dataclasses import dataclass


@dataclass(slots=True)
class PlayCounter:
    """Number of games started on this installation; persists across sessions."""

    games_started: int = 0

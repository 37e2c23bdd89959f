from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class OutcomeKind(Enum):
    NUMBER = auto()
    WILD = auto()
    SUPER_WILD = auto()
    BLOCKER = auto()
    BONUS = auto()


@dataclass(frozen=True, slots=True)
class SpinOutcome:
    """Result revealed for a single column of a spin.

    number is only set for OutcomeKind.NUMBER.
    """
    kind: OutcomeKind
    number: Optional[int] = None

    @classmethod
    def of_number(cls, value: int) -> "SpinOutcome":
        return cls(OutcomeKind.NUMBER, int(value))

    @classmethod
    def wild(cls) -> "SpinOutcome":
        return cls(OutcomeKind.WILD)

    @classmethod
    def super_wild(cls) -> "SpinOutcome":
        return cls(OutcomeKind.SUPER_WILD)

    @classmethod
    def blocker(cls) -> "SpinOutcome":
        return cls(OutcomeKind.BLOCKER)

    @classmethod
    def bonus(cls) -> "SpinOutcome":
        return cls(OutcomeKind.BONUS)

    @property
    def is_number(self) -> bool:
        return self.kind is OutcomeKind.NUMBER

    def label(self) -> str:
        if self.kind is OutcomeKind.NUMBER:
            return str(self.number)
        return self.kind.name.replace("_", " ")

"""Game lifecycle enumeration."""

from enum import Enum, auto


class Lifecycle(Enum):
    """
    Game lifecycle states.

    Flow: UNINITIALIZED → READY. Draws and reshuffles stay in READY.
    """

    UNINITIALIZED = auto()
    READY = auto()

    def __str__(self) -> str:
        return self.name.title()

"""Round lifecycle states."""

from enum import Enum, auto


class RoundState(Enum):
    """Lifecycle of one round within a session."""

    SETUP = auto()
    IN_PROGRESS = auto()
    ROUND_OVER = auto()
    ENDED = auto()

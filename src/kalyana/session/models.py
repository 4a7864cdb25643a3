"""Data structures for the session state machine."""

from enum import Enum
from typing import NamedTuple


class Phase(str, Enum):
    """Lifecycle phase of a session."""

    ENTERING = "entering"
    ACTIVE = "active"
    CLOSED = "closed"


class ReplySegments(NamedTuple):
    """A reply split into its main text and trailing citation block."""

    main: str
    citation: str = ""

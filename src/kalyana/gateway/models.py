"""Wire models for the gateway.

Hides the JSON shapes exchanged with clients from the relay logic.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class WireTurn(BaseModel):
    """One conversation turn as posted by a client."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Literal["user", "assistant"]
    content: str


@dataclass(frozen=True)
class RelayResult:
    """Status and JSON body produced by one relay call."""

    status: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def error(cls, status: int, message: str) -> "RelayResult":
        return cls(status=status, body={"error": message})

"""Data models for conversation history.

A Turn is the unit that is both sent to the gateway and persisted locally.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


class Turn(BaseModel):
    """One message in the conversation, tagged by speaker role."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Speaker: 'user' or 'assistant'")
    content: str = Field(description="Message text, possibly with a citation block")
    closing: bool = Field(default=False, description="Session-ending remark (presentation only)")

    def to_record(self) -> dict[str, Any]:
        """Serialize for storage; ``closing`` is written only when set."""
        record: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.closing:
            record["closing"] = True
        return record

    def to_wire(self) -> dict[str, str]:
        """The ``{role, content}`` shape sent to the gateway."""
        return {"role": self.role, "content": self.content}

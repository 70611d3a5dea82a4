"""Document position models.

Positions and headings are snapshots of one exact document text. They are
produced fresh on every read and must not be reused after the text has been
rewritten.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Position(BaseModel):
    """Half-open ``[start, end)`` character offset range into a document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: int = Field(..., ge=0, description="Offset of the first character")
    end: int = Field(..., ge=0, description="Offset one past the last character")

    @model_validator(mode="after")
    def check_order(self) -> "Position":
        """Validate that the range is not inverted."""
        if self.start > self.end:
            raise ValueError(
                f"start ({self.start}) must not be greater than end ({self.end})"
            )
        return self

    def __len__(self) -> int:
        """Return the number of characters covered."""
        return self.end - self.start


class Heading(BaseModel):
    """An outline heading and the span of its own line."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str = Field(..., description="Heading text without the # markers")
    level: int = Field(..., ge=1, description="Outline depth, 1 is top level")
    position: Position = Field(..., description="Span of the heading line")

"""Client response models.

Re-exports the shared response models from the API layer and defines the
ones only the client needs.
"""

from typing import Optional

from pydantic import BaseModel, Field

from api.models import ClockResponse, GameStatusResponse, TreeNodeView

__all__ = [
    # Re-exported from api.models
    "ClockResponse",
    "GameStatusResponse",
    "TreeNodeView",
    # Client-specific models
    "HealthResponse",
    "TranscriptLine",
]


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str = Field(..., description="Health status")


class TranscriptLine(BaseModel):
    """One terminal transcript entry as returned by the API.

    Attributes:
        id: Entry identifier.
        kind: input, output, system or narration.
        text: The line text (story markup is left as-is).
        path: Prompt path for input entries.
    """

    id: str = Field(..., description="Entry identifier")
    kind: str = Field(..., description="input, output, system or narration")
    text: str = Field(..., description="Line text")
    path: Optional[str] = Field(None, description="Prompt path (input entries)")

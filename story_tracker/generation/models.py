"""Generation data models."""

from pydantic import BaseModel, ConfigDict, Field

from story_tracker.inventory.models import InventoryV2
from story_tracker.tracker.models import TrackerData


class ChatMessage(BaseModel):
    """A chat history entry as supplied by the host."""

    model_config = ConfigDict(frozen=True)

    is_user: bool = Field(..., description="Whether the user wrote the message")
    content: str = Field(..., description="Message text")
    name: str | None = Field(default=None, description="Speaker display name")


class ParseResult(BaseModel):
    """Outcome of parsing one model response.

    `tracker_data` is None when no block reconciled; callers treat that as
    "no update available" and keep the current tracker.
    """

    tracker_data: TrackerData | None = Field(
        default=None, description="Reconciled tracker tree"
    )
    html: str | None = Field(default=None, description="Extracted HTML blocks")
    cleaned_text: str = Field(default="", description="Narrative with blocks removed")
    inventory: InventoryV2 | None = Field(
        default=None, description="Inventory reported alongside the tracker"
    )

    @property
    def has_update(self) -> bool:
        return self.tracker_data is not None

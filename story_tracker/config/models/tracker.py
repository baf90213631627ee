"""Default tracker behaviour configuration."""

from pydantic import BaseModel, Field

from story_tracker.tracker.enums import GenerationMode


class TrackerDefaultsConfig(BaseModel):
    """Defaults applied to a session's tracker settings on first load.

    Values persisted by the host take precedence over these.
    """

    enabled: bool = Field(default=True, description="Whether the tracker is active")
    auto_update: bool = Field(
        default=True, description="Regenerate the tracker after each sent message"
    )
    update_depth: int = Field(
        default=4, ge=0, le=100, description="Chat messages included as context"
    )
    generation_mode: GenerationMode = Field(
        default=GenerationMode.SEPARATE,
        description="'together' parses the main reply, 'separate' makes a dedicated call",
    )
    system_prompt: str = Field(default="", description="Extra instructions for the model")

"""Session state and update result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from story_tracker.tracker.models import TrackerData


class GenerationPhase(str, Enum):
    """Whether a tracker generation is in flight."""

    IDLE = "idle"
    GENERATING = "generating"


class SessionState(BaseModel):
    """Snapshot of one chat session's tracker state.

    Immutable: every transition in `session.baseline` returns a new state,
    and every tree it stores is a private deep copy.

    - tracker_data: the live, user-editable tree
    - last_generated_data: the most recent model result
    - committed_tracker_data: the baseline embedded in the next prompt
    """

    model_config = ConfigDict(frozen=True)

    tracker_data: TrackerData = Field(default_factory=TrackerData, description="Live tree")
    last_generated_data: TrackerData | None = Field(
        default=None, description="Most recent model output"
    )
    committed_tracker_data: TrackerData | None = Field(
        default=None, description="Baseline for the next prompt"
    )
    last_action_was_swipe: bool = Field(
        default=False, description="Whether the pending generation is a swipe"
    )
    is_generating: bool = Field(default=False, description="Generation mutex")

    @property
    def phase(self) -> GenerationPhase:
        return GenerationPhase.GENERATING if self.is_generating else GenerationPhase.IDLE


class TransitionResult(BaseModel):
    """Outcome of a transition that may be refused."""

    model_config = ConfigDict(frozen=True)

    state: SessionState
    accepted: bool
    reason: str | None = None


class UpdateStatus(str, Enum):
    """Outcome of a tracker update request."""

    UPDATED = "updated"
    NO_UPDATE = "no_update"
    ALREADY_IN_PROGRESS = "already_in_progress"
    DISABLED = "disabled"
    FAILED = "failed"


class UpdateResult(BaseModel):
    """Result of TrackerUpdater.generate_update and friends."""

    status: UpdateStatus = Field(..., description="Outcome")
    tracker_data: TrackerData | None = Field(
        default=None, description="New live tree when updated"
    )
    cleaned_text: str | None = Field(
        default=None, description="Narrative left after removing tracker blocks"
    )
    html: str | None = Field(default=None, description="HTML blocks from the reply")
    error: str | None = Field(default=None, description="Failure detail")

    @property
    def updated(self) -> bool:
        return self.status == UpdateStatus.UPDATED


class PromptInjection(BaseModel):
    """Text the host should inject into its main generation."""

    instructions: str = Field(default="", description="Tracker reply contract, together mode")
    context: str = Field(default="", description="Read-only tracker summary, separate mode")

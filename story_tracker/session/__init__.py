"""Session: baseline state machine and the tracker updater."""

from story_tracker.session.baseline import (
    begin_generation,
    complete_generation,
    edit_tracker,
    ensure_committed_baseline,
    fail_generation,
    on_message_sent,
    on_swipe,
    prompt_baseline,
    reset,
)
from story_tracker.session.models import (
    GenerationPhase,
    PromptInjection,
    SessionState,
    TransitionResult,
    UpdateResult,
    UpdateStatus,
)
from story_tracker.session.updater import TrackerUpdater

__all__ = [
    "GenerationPhase",
    "PromptInjection",
    "SessionState",
    "TrackerUpdater",
    "TransitionResult",
    "UpdateResult",
    "UpdateStatus",
    "begin_generation",
    "complete_generation",
    "edit_tracker",
    "ensure_committed_baseline",
    "fail_generation",
    "on_message_sent",
    "on_swipe",
    "prompt_baseline",
    "reset",
]

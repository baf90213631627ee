"""Baseline state machine.

Tracks which tracker snapshot the model is shown (the committed baseline)
versus what it last returned. A fresh message commits each new result. A
swipe regenerates the same turn, so its result must be produced from, and
must not replace, the baseline the swiped reply was produced from.

All transitions are pure: they take a SessionState and return a new one.
"""

from story_tracker.observability.logging import get_logger
from story_tracker.session.models import SessionState, TransitionResult
from story_tracker.tracker.factory import clone_tracker_data
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)


def on_message_sent(state: SessionState) -> SessionState:
    return state.model_copy(update={"last_action_was_swipe": False})


def on_swipe(state: SessionState) -> SessionState:
    """Mark the next generation as a swipe. Does not start one."""
    return state.model_copy(update={"last_action_was_swipe": True})


def begin_generation(state: SessionState) -> TransitionResult:
    """Acquire the generation mutex, or refuse if it is held."""
    if state.is_generating:
        logger.info("generation_rejected", reason="already_generating")
        return TransitionResult(state=state, accepted=False, reason="already_generating")

    return TransitionResult(
        state=state.model_copy(update={"is_generating": True}),
        accepted=True,
    )


def complete_generation(state: SessionState, tracker_data: TrackerData) -> SessionState:
    """Install a generation result and release the mutex.

    A non-swipe result becomes the committed baseline. A swipe result keeps
    the previous baseline, seeding it from the result only when none exists.
    """
    if state.last_action_was_swipe and state.committed_tracker_data is not None:
        committed = clone_tracker_data(state.committed_tracker_data)
    else:
        committed = clone_tracker_data(tracker_data)

    return state.model_copy(
        update={
            "tracker_data": clone_tracker_data(tracker_data),
            "last_generated_data": clone_tracker_data(tracker_data),
            "committed_tracker_data": committed,
            "last_action_was_swipe": False,
            "is_generating": False,
        }
    )


def fail_generation(state: SessionState) -> SessionState:
    """Release the mutex without touching any snapshot."""
    return state.model_copy(update={"is_generating": False, "last_action_was_swipe": False})


def ensure_committed_baseline(state: SessionState) -> SessionState:
    """Commit the latest result (or the live tree) before a new turn's generation.

    Skipped for swipes, which keep the baseline of the turn being redone.
    """
    if state.last_action_was_swipe:
        return state

    baseline = state.last_generated_data or state.tracker_data
    return state.model_copy(update={"committed_tracker_data": clone_tracker_data(baseline)})


def prompt_baseline(state: SessionState) -> TrackerData:
    """The tree to embed in the next prompt."""
    if state.committed_tracker_data is not None:
        return clone_tracker_data(state.committed_tracker_data)
    return clone_tracker_data(state.tracker_data)


def reset(state: SessionState, tracker_data: TrackerData) -> SessionState:
    """Point every snapshot at a fresh tree (session switch, preset load)."""
    return state.model_copy(
        update={
            "tracker_data": clone_tracker_data(tracker_data),
            "last_generated_data": clone_tracker_data(tracker_data),
            "committed_tracker_data": clone_tracker_data(tracker_data),
            "last_action_was_swipe": False,
        }
    )


def edit_tracker(state: SessionState, tracker_data: TrackerData) -> SessionState:
    """Replace the live tree after a user edit."""
    return state.model_copy(update={"tracker_data": clone_tracker_data(tracker_data)})

"""Tracker update orchestration.

TrackerUpdater drives the baseline state machine around model round trips
for one chat session. It is single-threaded asyncio code: the generation
mutex is acquired before the first await, so a second concurrent request
is refused immediately instead of queueing behind the first.
"""

import time

from story_tracker.config.models.generation import GenerationConfig
from story_tracker.generation.models import ChatMessage, ParseResult
from story_tracker.generation.parser import parse_response
from story_tracker.generation.prompt_builder import (
    build_tracker_context,
    generate_separate_update_prompt,
    generate_tracker_prompt,
)
from story_tracker.inventory.models import InventoryV2
from story_tracker.observability.logging import get_logger
from story_tracker.observability.metrics import (
    LLM_TOKENS,
    TRACKER_GENERATION_LATENCY,
    TRACKER_UPDATES,
)
from story_tracker.persistence.manager import TrackerPersistence
from story_tracker.persistence.models import TrackerSettings
from story_tracker.presets.models import Preset
from story_tracker.providers.llm.base import LLMProvider, ProviderError
from story_tracker.session import baseline
from story_tracker.session.models import (
    PromptInjection,
    SessionState,
    UpdateResult,
    UpdateStatus,
)
from story_tracker.tracker.enums import GenerationMode
from story_tracker.tracker.factory import clone_tracker_data
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)


class TrackerUpdater:
    """Keeps one chat session's tracker in sync with model replies.

    In `separate` mode the tracker is refreshed by a dedicated provider call
    after each sent message. In `together` mode the main reply carries the
    tracker block and is handed in through `on_message_received`.
    """

    def __init__(
        self,
        provider: LLMProvider,
        persistence: TrackerPersistence,
        settings: TrackerSettings,
        generation_config: GenerationConfig | None = None,
        chat_id: str | None = None,
    ) -> None:
        self._provider = provider
        self._persistence = persistence
        self._settings = settings
        self._generation_config = generation_config or GenerationConfig()
        self._chat_id = chat_id
        self._state = baseline.reset(SessionState(), settings.tracker_data)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def settings(self) -> TrackerSettings:
        return self._settings

    @property
    def tracker_data(self) -> TrackerData:
        return self._state.tracker_data

    @property
    def inventory(self) -> InventoryV2:
        return self._settings.inventory

    @property
    def is_generating(self) -> bool:
        return self._state.is_generating

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    async def switch_chat(self, chat_id: str | None) -> None:
        """Re-read settings and the chat's saved tracker after a chat switch."""
        self._chat_id = chat_id
        self._settings = await self._persistence.load_settings()

        tracker_data = self._settings.tracker_data
        if chat_id is not None:
            saved = await self._persistence.load_chat_data(chat_id)
            if saved is not None:
                tracker_data = saved

        self._state = baseline.reset(SessionState(), tracker_data)
        self._settings.tracker_data = clone_tracker_data(tracker_data)
        logger.info(
            "chat_switched",
            chat_id=chat_id,
            sections=len(tracker_data.sections),
        )

    async def on_message_sent(
        self, chat_history: list[ChatMessage] | None = None
    ) -> UpdateResult | None:
        """Handle a freshly sent user message.

        Triggers an update when auto-update is on in separate mode; returns
        None when no update was attempted.
        """
        self._state = baseline.on_message_sent(self._state)

        if not (self._settings.enabled and self._settings.auto_update):
            return None
        if self._settings.generation_mode != GenerationMode.SEPARATE:
            return None

        return await self.generate_update(chat_history)

    def on_swipe(self) -> None:
        self._state = baseline.on_swipe(self._state)

    def on_generation_started(self) -> PromptInjection | None:
        """Prepare prompt injections for the host's main generation.

        Returns None when the tracker is disabled, or while a tracker
        generation of our own is in flight.
        """
        if not self._settings.enabled or self._state.is_generating:
            return None

        self._state = baseline.ensure_committed_baseline(self._state)
        prompt_data = baseline.prompt_baseline(self._state)

        if self._settings.generation_mode == GenerationMode.TOGETHER:
            return PromptInjection(
                instructions=generate_tracker_prompt(
                    prompt_data,
                    include_narrative=True,
                    system_prompt=self._settings.system_prompt,
                )
            )

        return PromptInjection(context=build_tracker_context(prompt_data))

    async def on_message_received(self, raw_text: str) -> UpdateResult:
        """Parse the main reply for a tracker block (together mode)."""
        if not self._settings.enabled:
            return self._record(UpdateResult(status=UpdateStatus.DISABLED))
        if self._settings.generation_mode != GenerationMode.TOGETHER:
            return UpdateResult(status=UpdateStatus.NO_UPDATE, cleaned_text=raw_text)

        transition = baseline.begin_generation(self._state)
        if not transition.accepted:
            return self._record(UpdateResult(status=UpdateStatus.ALREADY_IN_PROGRESS))
        self._state = transition.state

        try:
            result = self._apply_parse_result(parse_response(raw_text, self._state.tracker_data))
        finally:
            if self._state.is_generating:
                self._state = baseline.fail_generation(self._state)

        if result.updated:
            await self._persist()
        return self._record(result)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate_update(
        self, chat_history: list[ChatMessage] | None = None
    ) -> UpdateResult:
        """Run a dedicated tracker-update call.

        Works in either generation mode. Refused with ALREADY_IN_PROGRESS
        while another generation holds the mutex; the tracker is left
        untouched in that case.
        """
        if not self._settings.enabled:
            return self._record(UpdateResult(status=UpdateStatus.DISABLED))

        transition = baseline.begin_generation(self._state)
        if not transition.accepted:
            return self._record(UpdateResult(status=UpdateStatus.ALREADY_IN_PROGRESS))
        self._state = transition.state

        try:
            result = await self._run_generation(chat_history)
        finally:
            if self._state.is_generating:
                self._state = baseline.fail_generation(self._state)

        if result.updated:
            await self._persist()
        return self._record(result)

    async def _run_generation(self, chat_history: list[ChatMessage] | None) -> UpdateResult:
        self._state = baseline.ensure_committed_baseline(self._state)
        messages = generate_separate_update_prompt(
            baseline.prompt_baseline(self._state),
            chat_history,
            update_depth=self._settings.update_depth,
            system_prompt=self._settings.system_prompt,
        )

        logger.info(
            "tracker_generation_started",
            provider=self._provider.provider_name,
            swipe=self._state.last_action_was_swipe,
        )

        provider_name = self._provider.provider_name
        start = time.perf_counter()
        try:
            response = await self._provider.generate(
                messages,
                model=self._generation_config.model,
                max_tokens=self._generation_config.max_tokens,
                temperature=self._generation_config.temperature,
            )
        except ProviderError as e:
            logger.error(
                "tracker_generation_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return UpdateResult(status=UpdateStatus.FAILED, error=str(e))
        except Exception as e:  # noqa: BLE001
            logger.exception("tracker_generation_unexpected_error", error_type=type(e).__name__)
            return UpdateResult(status=UpdateStatus.FAILED, error=str(e))
        finally:
            TRACKER_GENERATION_LATENCY.labels(provider=provider_name).observe(
                time.perf_counter() - start
            )

        if response.usage is not None:
            LLM_TOKENS.labels(
                provider=provider_name, model=response.model, direction="input"
            ).inc(response.usage.prompt_tokens)
            LLM_TOKENS.labels(
                provider=provider_name, model=response.model, direction="output"
            ).inc(response.usage.completion_tokens)

        return self._apply_parse_result(parse_response(response.content, self._state.tracker_data))

    def _record(self, result: UpdateResult) -> UpdateResult:
        TRACKER_UPDATES.labels(
            mode=self._settings.generation_mode.value, status=result.status.value
        ).inc()
        return result

    def _apply_parse_result(self, parsed: ParseResult) -> UpdateResult:
        if parsed.tracker_data is None:
            logger.info("tracker_generation_no_update")
            return UpdateResult(
                status=UpdateStatus.NO_UPDATE,
                cleaned_text=parsed.cleaned_text,
                html=parsed.html,
            )

        self._state = baseline.complete_generation(self._state, parsed.tracker_data)
        self._settings.tracker_data = clone_tracker_data(self._state.tracker_data)
        if parsed.inventory is not None:
            self._settings.inventory = parsed.inventory

        logger.info(
            "tracker_generation_completed",
            sections=len(parsed.tracker_data.sections),
        )
        return UpdateResult(
            status=UpdateStatus.UPDATED,
            tracker_data=clone_tracker_data(self._state.tracker_data),
            cleaned_text=parsed.cleaned_text,
            html=parsed.html,
        )

    # ------------------------------------------------------------------
    # User edits
    # ------------------------------------------------------------------

    async def edit_tracker(self, tracker_data: TrackerData) -> None:
        """Replace the live tree with a user-edited one."""
        self._state = baseline.edit_tracker(self._state, tracker_data)
        self._settings.tracker_data = clone_tracker_data(tracker_data)
        await self._persist()

    async def edit_inventory(self, inventory: InventoryV2) -> None:
        self._settings.inventory = inventory.model_copy(deep=True)
        await self._persist()

    async def reset_tracker(self, tracker_data: TrackerData) -> None:
        """Start over from a tree, discarding generated and committed snapshots."""
        self._state = baseline.reset(self._state, tracker_data)
        self._settings.tracker_data = clone_tracker_data(tracker_data)
        await self._persist()

    async def apply_preset(self, preset: Preset) -> None:
        """Load a preset's tracker and system prompt as a fresh start."""
        self._settings.system_prompt = preset.system_prompt
        self._settings.current_preset = preset.name
        await self.reset_tracker(preset.tracker_data)

    async def _persist(self) -> None:
        """Save settings and chat data. Failures are logged, never raised."""
        try:
            await self._persistence.save_settings(self._settings)
            if self._chat_id is not None:
                await self._persistence.save_chat_data(self._chat_id, self._state.tracker_data)
        except Exception as e:  # noqa: BLE001
            logger.error("tracker_persist_failed", error=str(e), error_type=type(e).__name__)

"""Response parsing.

A model reply mixes narrative, optional HTML widgets and a fenced tracker
block. parse_response separates them:

1. `<div>`, `<style>` and `<script>` blocks are lifted out as `html`.
2. Fenced blocks are tried in order; the first that decodes as JSON and
   reconciles against the template wins and is cut from the narrative.
3. If none wins, the legacy plain-text block format is tried.

Parsing never raises. A reply with nothing usable yields tracker_data=None.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from story_tracker.generation.legacy import (
    LEGACY_BLOCK_PATTERN,
    is_tracker_block,
    parse_tracker_block,
)
from story_tracker.generation.models import ParseResult
from story_tracker.generation.reconcile import PAYLOAD_WRAPPER_KEYS, restore_tracker_from_llm
from story_tracker.inventory.extraction import extract_inventory
from story_tracker.inventory.migration import normalize_inventory
from story_tracker.inventory.models import InventoryV2
from story_tracker.observability.logging import get_logger
from story_tracker.observability.metrics import RESPONSES_PARSED
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)

HTML_BLOCK_PATTERN = re.compile(
    r"(<div[^>]*>[\s\S]*?</div>|<style[^>]*>[\s\S]*?</style>|<script[^>]*>[\s\S]*?</script>)",
    re.IGNORECASE,
)
CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")


def _extract_html(text: str) -> tuple[str | None, str]:
    blocks = HTML_BLOCK_PATTERN.findall(text)
    if not blocks:
        return None, text
    return "\n".join(blocks), HTML_BLOCK_PATTERN.sub("", text)


def _payload_inventory(payload: Any) -> InventoryV2 | None:
    if not isinstance(payload, Mapping):
        return None

    candidates = [payload]
    candidates.extend(
        payload[key] for key in PAYLOAD_WRAPPER_KEYS if isinstance(payload.get(key), Mapping)
    )
    for candidate in candidates:
        if candidate.get("inventory") is not None:
            return normalize_inventory(candidate["inventory"])
    return None


def _restore(payload: Any, template: TrackerData | None) -> TrackerData | None:
    try:
        return restore_tracker_from_llm(payload, template)
    except ValidationError as e:
        logger.warning("tracker_payload_rejected", error=str(e))
        return None


def _cut(text: str, span: tuple[int, int]) -> str:
    start, end = span
    return text[:start] + text[end:]


def _parse_json_blocks(
    text: str, template: TrackerData | None
) -> tuple[TrackerData | None, InventoryV2 | None, str]:
    for match in CODE_BLOCK_PATTERN.finditer(text):
        try:
            payload = json.loads(match.group(1))
        except (ValueError, RecursionError) as e:
            logger.debug("code_block_not_json", error=str(e))
            continue

        restored = _restore(payload, template)
        if restored is None:
            continue

        RESPONSES_PARSED.labels(format="json").inc()
        return restored, _payload_inventory(payload), _cut(text, match.span())

    return None, None, text


def _parse_legacy_blocks(
    text: str, template: TrackerData | None
) -> tuple[TrackerData | None, InventoryV2 | None, str]:
    for match in LEGACY_BLOCK_PATTERN.finditer(text):
        block = match.group(1).strip()
        if not is_tracker_block(block):
            continue

        try:
            restored = parse_tracker_block(block, template)
        except ValidationError as e:
            logger.warning("legacy_tracker_block_rejected", error=str(e))
            continue
        if restored is None:
            continue

        logger.info("legacy_tracker_block_parsed")
        RESPONSES_PARSED.labels(format="legacy").inc()
        return restored, extract_inventory(block), _cut(text, match.span())

    return None, None, text


def parse_response(raw_text: Any, template: TrackerData | None) -> ParseResult:
    """Split a model reply into tracker data, HTML and narrative text."""
    if not isinstance(raw_text, str):
        return ParseResult()

    html, text = _extract_html(raw_text)

    tracker_data, inventory, text = _parse_json_blocks(text, template)
    if tracker_data is None:
        tracker_data, inventory, text = _parse_legacy_blocks(text, template)

    if tracker_data is None:
        logger.info("tracker_update_not_found", response=raw_text)
        RESPONSES_PARSED.labels(format="none").inc()

    cleaned_text = EXCESS_NEWLINES_PATTERN.sub("\n\n", text).strip()

    return ParseResult(
        tracker_data=tracker_data,
        html=html,
        cleaned_text=cleaned_text,
        inventory=inventory,
    )

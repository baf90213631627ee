"""Prometheus metrics for the story tracker.

Counts tracker updates by outcome, which reply format a tracker was parsed
from, and inputs the inventory sanitizers refused.
"""

from prometheus_client import Counter, Histogram

# Update metrics
TRACKER_UPDATES = Counter(
    "story_tracker_updates_total",
    "Total number of tracker update requests",
    labelnames=["mode", "status"],
)

TRACKER_GENERATION_LATENCY = Histogram(
    "story_tracker_generation_latency_seconds",
    "Latency of dedicated tracker-update model calls in seconds",
    labelnames=["provider"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# Parsing metrics
RESPONSES_PARSED = Counter(
    "story_tracker_responses_parsed_total",
    "Model replies parsed, by the format the tracker was found in",
    labelnames=["format"],
)

# LLM metrics
LLM_TOKENS = Counter(
    "story_tracker_llm_tokens_total",
    "Total LLM tokens used by tracker updates",
    labelnames=["provider", "model", "direction"],
)

# Security metrics
SANITIZER_REJECTIONS = Counter(
    "story_tracker_sanitizer_rejections_total",
    "Inventory names refused or truncated by the sanitizers",
    labelnames=["kind", "reason"],
)


def setup_metrics() -> None:
    """Initialize metrics configuration.

    Currently a no-op: prometheus_client registers metrics when they are
    defined. Hosts exposing an endpoint call this at startup.
    """
    pass

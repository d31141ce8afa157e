"""Countdown configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountdownConfig:
    """Immutable defaults shared by the tick loop and the stage scheduler.

    Attributes:
        tick_interval_ms: Milliseconds between periodic ticks.
        stage_bucket_ms: Width of the stage memoization bucket.
        stage_cache_size: Resolved-threshold lists kept (one per duration).
        snapshot_cache_size: Stage snapshots kept before oldest-first eviction.
        completion_message: Message handed to celebration hooks.
    """

    tick_interval_ms: int = 1000
    stage_bucket_ms: int = 50
    stage_cache_size: int = 10
    snapshot_cache_size: int = 64
    completion_message: str = "Happy New Year!"

    def __post_init__(self) -> None:
        for name in (
            "tick_interval_ms",
            "stage_bucket_ms",
            "stage_cache_size",
            "snapshot_cache_size",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")


DEFAULT_CONFIG = CountdownConfig()

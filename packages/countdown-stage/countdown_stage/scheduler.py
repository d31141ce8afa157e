"""StageScheduler - remaining time to a named stage, memoized by time bucket."""
from __future__ import annotations

import logging
import math
from collections import OrderedDict
from typing import Generic, Sequence, TypeVar

from countdown.config import DEFAULT_CONFIG, CountdownConfig

from countdown_stage.thresholds import parse_threshold
from countdown_stage.types import (
    NoStagesError,
    ResolvedStage,
    StageDefinition,
    StageOrderError,
    StageSnapshot,
)

V = TypeVar("V")

logger = logging.getLogger(__name__)


class StageScheduler(Generic[V]):
    """Maps ``(remaining_ms, duration_ms)`` to the active stage and its progress.

    Stages are given in descending order of resolved threshold. Each stage
    owns the stretch of remaining time from its own threshold down to the
    next stage's, so the active stage is the last one listed whose threshold
    is still at or above the remaining time.
    """

    def __init__(
        self,
        stages: Sequence[StageDefinition[V]],
        bucket_ms: int | None = None,
        config: CountdownConfig = DEFAULT_CONFIG,
    ) -> None:
        if not stages:
            raise NoStagesError("No stages defined")
        if bucket_ms is None:
            bucket_ms = config.stage_bucket_ms
        if bucket_ms <= 0:
            raise ValueError("bucket_ms must be positive")
        self._stages: tuple[StageDefinition[V], ...] = tuple(stages)
        self._bucket_ms = bucket_ms
        self._resolved_limit = config.stage_cache_size
        self._snapshot_limit = config.snapshot_cache_size
        self._resolved: OrderedDict[float, list[ResolvedStage[V]]] = OrderedDict()
        self._snapshots: OrderedDict[tuple[int, float], StageSnapshot[V]] = OrderedDict()
        self._snapshot_duration: float | None = None

    @property
    def stages(self) -> tuple[StageDefinition[V], ...]:
        return self._stages

    @property
    def bucket_ms(self) -> int:
        return self._bucket_ms

    def resolve(self, duration_ms: float) -> list[ResolvedStage[V]]:
        """Stages with thresholds in ms for ``duration_ms``. Cached per duration."""
        cached = self._resolved.get(duration_ms)
        if cached is not None:
            return cached

        resolved = [
            ResolvedStage(s.name, s.values, parse_threshold(s.at, duration_ms))
            for s in self._stages
        ]
        for upper, lower in zip(resolved, resolved[1:]):
            if lower.threshold_ms > upper.threshold_ms:
                raise StageOrderError(
                    f"Stage {lower.name!r} ({lower.threshold_ms:g}ms) follows "
                    f"{upper.name!r} ({upper.threshold_ms:g}ms); stages must be "
                    f"listed by descending threshold"
                )

        if len(self._resolved) >= self._resolved_limit:
            self._resolved.popitem(last=False)
        self._resolved[duration_ms] = resolved
        return resolved

    def _compute(self, remaining_ms: float, duration_ms: float) -> StageSnapshot[V]:
        stages = self.resolve(duration_ms)
        last = len(stages) - 1

        if remaining_ms <= 0:
            s = stages[last]
            return StageSnapshot(s.name, s.values, last, 1.0)

        # Stage i owns the window (threshold[i+1], threshold[i]]; the last
        # stage's window runs down to zero.
        for i in range(last, -1, -1):
            upper = stages[i]
            if remaining_ms > upper.threshold_ms:
                continue
            lower_ms = stages[i + 1].threshold_ms if i < last else 0.0
            window = upper.threshold_ms - lower_ms
            if window > 0:
                progress = (upper.threshold_ms - remaining_ms) / window
            else:
                progress = 1.0 if i == last else 0.0
            return StageSnapshot(upper.name, upper.values, i, min(1.0, max(0.0, progress)))

        # More time left than the first threshold covers.
        s = stages[0]
        return StageSnapshot(s.name, s.values, 0, 0.0)

    def get_stage(self, remaining_ms: float, duration_ms: float) -> StageSnapshot[V]:
        """Snapshot for this moment; the same object for repeat queries in a bucket."""
        if duration_ms != self._snapshot_duration:
            self._snapshots.clear()
            self._snapshot_duration = duration_ms

        key = (math.floor(remaining_ms / self._bucket_ms), duration_ms)
        snapshot = self._snapshots.get(key)
        if snapshot is not None:
            return snapshot

        snapshot = self._compute(remaining_ms, duration_ms)
        if len(self._snapshots) >= self._snapshot_limit:
            self._snapshots.popitem(last=False)
        self._snapshots[key] = snapshot
        return snapshot

    def clear_cache(self) -> None:
        self._resolved.clear()
        self._snapshots.clear()
        self._snapshot_duration = None
        logger.debug("stage cache cleared")

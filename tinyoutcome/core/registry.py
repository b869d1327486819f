from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Tuple

from .outcome import OutcomeTracker, WarmupPolicy, WarmupSpec


logger = logging.getLogger(__name__)


class OutcomeRegistry:
    """Named outcome trackers shared across threads.

    Every read and write of a tracker happens under one lock, so callers see
    push/update_stats results as a whole. Trackers are independent; nothing
    here compares one signal with another.
    """

    def __init__(self, precision: int, warmup: WarmupSpec = WarmupPolicy.FULL) -> None:
        # Validate once up front so a bad config fails here, not on first record.
        OutcomeTracker(precision, warmup)
        self._precision = precision
        self._warmup = warmup
        self._lock = threading.RLock()
        self._trackers: Dict[str, OutcomeTracker] = {}

    def _tracker(self, name: str) -> OutcomeTracker:
        tracker = self._trackers.get(name)
        if tracker is None:
            tracker = OutcomeTracker(self._precision, self._warmup)
            self._trackers[name] = tracker
            logger.debug(
                "created tracker",
                extra={"signal": name, "precision": self._precision, "warmup": tracker.warmup},
            )
        return tracker

    def record(self, name: str, sample: int) -> float:
        """Push `sample` into the tracker for `name` and return its probability."""
        with self._lock:
            tracker = self._tracker(name)
            tracker.push(sample)
            return tracker.probability

    def update_stats(self, name: str) -> Tuple[float, float, float]:
        with self._lock:
            return self._trackers[name].update_stats()

    def winner_at(self, name: str, threshold: float) -> bool:
        with self._lock:
            return self._trackers[name].winner_at(threshold)

    def get(self, name: str) -> Dict[str, Any]:
        with self._lock:
            return self._trackers[name].to_dict()

    def describe(self, name: str) -> str:
        with self._lock:
            return str(self._trackers[name])

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._trackers)

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {k: v.to_dict() for k, v in self._trackers.items()}

from __future__ import annotations

from enum import Enum
from numbers import Integral
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .buffers import RingBuffer
from .errors import InvalidConfiguration, InvalidSample, InvalidWindow
from .prediction import Outlook, classify


# Windows used by update_stats() never exceed this many samples.
STATS_WINDOW_CAP = 100


class WarmupPolicy(str, Enum):
    FULL = "full"
    TWO_THIRDS = "two_thirds"
    HALF = "half"
    ONE_THIRD = "one_third"
    NONE = "none"

    def threshold(self, precision: int) -> int:
        if self is WarmupPolicy.FULL:
            return precision
        if self is WarmupPolicy.TWO_THIRDS:
            return (precision // 3) * 2
        if self is WarmupPolicy.HALF:
            return precision // 2
        if self is WarmupPolicy.ONE_THIRD:
            return precision // 3
        return 0


WarmupSpec = Union[WarmupPolicy, str, int]


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def resolve_warmup(precision: int, warmup: WarmupSpec) -> int:
    """Turn a warmup policy or explicit sample count into a threshold."""
    if isinstance(warmup, WarmupPolicy):
        return warmup.threshold(precision)
    if isinstance(warmup, str):
        try:
            return WarmupPolicy(warmup.lower()).threshold(precision)
        except ValueError:
            raise InvalidConfiguration(f"Invalid warmup: {warmup!r}") from None
    if _is_int(warmup) and 1 <= warmup <= precision:
        return int(warmup)
    raise InvalidConfiguration(f"Invalid warmup: {warmup!r}")


class OutcomeTracker:
    """Track the last `precision` binary outcomes of some event.

    Usage:
        o = OutcomeTracker(128, WarmupPolicy.TWO_THIRDS)  # warm after 84 samples
        for outcome in outcomes:
            o.push(outcome)
        o.warm(), o.probability, o.prediction()

    Once `precision` samples are stored the oldest one is dropped on every
    push. `probability` is maintained incrementally; the windowed min/max/avg
    rates are only refreshed by an explicit `update_stats()` call so that a
    push stays O(1).

    Not thread-safe. See `OutcomeRegistry` for shared use.
    """

    def __init__(self, precision: int, warmup: WarmupSpec = WarmupPolicy.FULL) -> None:
        if not _is_int(precision) or precision < 1:
            raise InvalidConfiguration(f"Invalid precision: {precision!r}")
        self._precision: int = int(precision)
        self._warmup: int = resolve_warmup(self._precision, warmup)
        self._buffer: RingBuffer[int] = RingBuffer(self._precision)
        # Same history as the ring, packed as a shift register masked to precision bits.
        self._mask: int = (1 << self._precision) - 1
        self._value: int = 0
        self._warmth: int = 0
        self._one_count: int = 0
        self._probability: float = 0.0
        # No data yet: min starts high and max starts low.
        self._min: float = 1.0
        self._max: float = 0.0
        self._avg: float = 0.0

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def warmup(self) -> int:
        return self._warmup

    @property
    def warmth(self) -> int:
        return self._warmth

    @property
    def samples(self) -> int:
        return self._buffer.size()

    @property
    def one_count(self) -> int:
        return self._one_count

    @property
    def cursor(self) -> int:
        return self._buffer.cursor()

    @property
    def probability(self) -> float:
        return self._probability

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def avg(self) -> float:
        return self._avg

    @property
    def value(self) -> List[Optional[int]]:
        """Raw slots in storage order; None marks a slot never written."""
        return self._buffer.slots()

    def push(self, sample: int) -> int:
        """Record one outcome and return the updated numeric value."""
        if not _is_int(sample) or sample not in (0, 1):
            raise InvalidSample(f"Invalid sample: {sample!r}")
        sample = int(sample)

        evicted = self._buffer.write(sample)
        if self._warmth < self._warmup:
            self._warmth += 1
        if evicted == 1:
            self._one_count -= 1
        self._one_count += sample
        self._probability = self._one_count / self._buffer.size()
        self._value = ((self._value << 1) | sample) & self._mask
        return self._value

    def __lshift__(self, sample: int) -> int:
        return self.push(sample)

    def ordered(self) -> List[int]:
        """Stored samples oldest-to-newest."""
        return self._buffer.ordered()

    def winner_at(self, threshold: float) -> bool:
        return self._probability >= threshold

    def winner_at_lately(self, threshold: float, window: int) -> bool:
        """Compare the ones rate of the last `window` samples to `threshold`."""
        if not _is_int(window) or window < 1 or window > self.samples:
            raise InvalidWindow(
                f"Invalid window: {window!r} (have {self.samples} samples)"
            )
        recent = self._buffer.latest(int(window))
        return sum(recent) / len(recent) >= threshold

    def warm(self) -> bool:
        return self._warmth >= self._warmup

    def cold(self) -> bool:
        return not self.warm()

    def full(self) -> bool:
        return self._buffer.full()

    def prediction(self) -> Outlook:
        return classify(self._probability, self.warm())

    def update_stats(self) -> Tuple[float, float, float]:
        """Recompute min/max/avg of the ones rate over sliding windows.

        Windows are `min(samples, 100)` long and slide one sample at a time
        across the ordered history, so a full 500-sample tracker folds 401
        windows. `avg` is the mean of the per-window rates, which is not the
        same thing as `probability`.
        """
        count = self.samples
        if count == 0:
            return self._min, self._max, self._avg

        window = min(count, STATS_WINDOW_CAP)
        bits = np.fromiter(self._buffer.ordered(), dtype=np.int64, count=count)
        csum = np.concatenate(([0], np.cumsum(bits)))
        rates = (csum[window:] - csum[:-window]) / window

        self._min = min(1.0, float(rates.min()))
        self._max = max(0.0, float(rates.max()))
        self._avg = float(rates.mean())
        return self._min, self._max, self._avg

    def numeric_value(self) -> int:
        """Stored samples read as a binary number, oldest sample most significant."""
        return self._value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.numeric_value(),
            "samples": self.samples,
            "warmth": self._warmth,
            "warmup": self._warmup,
            "warm": self.warm(),
            "probability": self._probability,
            "prediction": self.prediction().value,
            "one_count": self._one_count,
            "min": self._min,
            "max": self._max,
            "avg": self._avg,
        }

    def __str__(self) -> str:
        recent = "".join(str(bit) for bit in self._buffer.latest(10))
        state = "W" if self.warm() else "c"
        return (
            f"L10 {recent.rjust(10, '?')} {state} {self._probability:.2f} "
            f"{self._warmth}/{self._warmup}::{self.samples}/{self._precision}"
        )

    def __repr__(self) -> str:
        return f"OutcomeTracker(precision={self._precision}, warmup={self._warmup})"

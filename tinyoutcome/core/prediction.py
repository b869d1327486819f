from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class Outlook(str, Enum):
    """Heuristic label for how likely the next outcome is to be a 1.

    These are rough bands for small histories, not confidence intervals: with
    a few hundred samples a 0.49 rate is treated as a coinflip.
    """

    COLD = "cold"
    DISASTER = "disaster"
    STRONGLY_NEGATIVE = "strongly_negative"
    NEGATIVE = "negative"
    ONE_THIRD = "one_third"
    WEAKLY_NEGATIVE = "weakly_negative"
    COINFLIP = "coinflip"
    WEAKLY_POSITIVE = "weakly_positive"
    TWO_THIRDS = "two_thirds"
    POSITIVE = "positive"
    STRONGLY_POSITIVE = "strongly_positive"
    AMAZING = "amazing"


# (upper bound, bound is inclusive, label), checked in order.
_BANDS: List[Tuple[float, bool, Outlook]] = [
    (0.05, False, Outlook.DISASTER),
    (0.10, False, Outlook.STRONGLY_NEGATIVE),
    (0.32, False, Outlook.NEGATIVE),
    (0.34, True, Outlook.ONE_THIRD),
    (0.48, False, Outlook.WEAKLY_NEGATIVE),
    (0.52, True, Outlook.COINFLIP),
    (0.65, False, Outlook.WEAKLY_POSITIVE),
    (0.67, True, Outlook.TWO_THIRDS),
    (0.90, True, Outlook.POSITIVE),
    (0.95, False, Outlook.STRONGLY_POSITIVE),
]


def classify(probability: float, warm: bool) -> Outlook:
    if not warm:
        return Outlook.COLD
    for upper, inclusive, label in _BANDS:
        if probability < upper or (inclusive and probability == upper):
            return label
    return Outlook.AMAZING

"""Tiny binary outcome tracking.

An `OutcomeTracker` keeps the last N outcomes (0 or 1) of some event in a
fixed-size ring and answers "how often has this been a 1 lately?" along with
windowed min/max/avg rates over the stored history.
"""

from .core.errors import InvalidConfiguration, InvalidSample, InvalidWindow, TinyOutcomeError
from .core.outcome import OutcomeTracker, WarmupPolicy
from .core.prediction import Outlook
from .core.registry import OutcomeRegistry

__all__ = [
    "InvalidConfiguration",
    "InvalidSample",
    "InvalidWindow",
    "OutcomeRegistry",
    "OutcomeTracker",
    "Outlook",
    "TinyOutcomeError",
    "WarmupPolicy",
]

from __future__ import annotations


class TinyOutcomeError(ValueError):
    """Base class for caller contract violations."""


class InvalidConfiguration(TinyOutcomeError):
    pass


class InvalidSample(TinyOutcomeError):
    pass


class InvalidWindow(TinyOutcomeError):
    pass

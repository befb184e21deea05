"""Validation errors raised by the risk engine.

Every error is a local, synchronous rejection of a single call. None of
them leave the engine in a bad state, so the caller can correct its input
and try again.
"""


class RiskEngineError(ValueError):
    """Base class for all rejected engine calls."""


class InvalidAmount(RiskEngineError):
    """Amount is non-numeric, non-finite, or not strictly positive."""


class InvalidRecipient(RiskEngineError):
    """Recipient identifier is missing or blank."""


class UnconfirmedOverride(RiskEngineError):
    """A flagged transaction was finalized without user confirmation."""


class InvalidReportTransition(RiskEngineError):
    """The report confirmation flow was driven out of order."""

"""Exception types raised by the UNO engine."""


class UnoError(ValueError):
    """Base class for every error raised by the engine."""


class ConfigurationError(UnoError):
    """Invalid construction parameters (player count, target score, hand size)."""


class IllegalActionError(UnoError):
    """An action that the current round state does not allow.

    Raised before anything is mutated, so the round is unchanged.
    """


class MementoError(UnoError):
    """A memento failed validation and cannot be restored."""

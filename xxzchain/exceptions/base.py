"""Base exceptions raised by xxzchain."""


class XXZChainError(Exception):
    """Any error raised by xxzchain."""

    pass


class XXZChainValueError(ValueError, XXZChainError):
    """A ValueError raised by xxzchain.

    Usage:
        Precondition violations (bad selectors, mismatched fields, lookups
        outside the basis) are subclasses of XXZChainValueError so that they
        stay catchable as plain ValueError.
    """

    pass

"""Exceptions raised by the harness."""


class HarnessError(Exception):
    """Base class for harness failures."""

    pass


class SetupError(HarnessError):
    """Raised when a run cannot start: missing files, tools or environment."""

    pass

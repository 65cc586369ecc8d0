"""Custom exception hierarchy for pylivetiming."""

from __future__ import annotations


class LiveTimingError(Exception):
    """Base exception for all pylivetiming errors."""


class LiveTimingConfigError(LiveTimingError):
    """Invalid or missing configuration."""


class SchemaMismatchError(LiveTimingError, TypeError):
    """A patch does not have the same shape as the state it is merged into.

    This should never happen with a well-formed feed. The merge engine always
    raises it; the ingestion layer decides whether to skip the message or abort.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        expected: str = "",
    ) -> None:
        self.path = path
        self.expected = expected
        super().__init__(message)


class UnparsableDurationError(LiveTimingError, ValueError):
    """A lap or sector time string could not be parsed."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unparsable lap time: {value!r}")


class EmptyTickSequenceError(LiveTimingError):
    """A position patch arrived before any tick was appended."""

"""Exception types raised by measurekit.

Contract violations on argument values (negative counts, negative
nanoseconds) are asserted at the call site; the classes here cover misuse
of the stateful components and unparseable input.
"""


class MeasurementError(Exception):
    """Base class for all measurekit errors."""


class InvalidSequenceError(MeasurementError, RuntimeError):
    """A stateful component was driven out of order.

    Raised when starting something that is already running, or when
    finishing, checkpointing or stopping something that was never started.
    """


class EmptyInputError(MeasurementError, ValueError):
    """Statistics were requested over zero measurements."""


class InvalidDurationError(MeasurementError, ValueError):
    """A duration string could not be parsed into a non-negative duration."""

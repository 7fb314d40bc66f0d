"""Exception types raised by frame assembly and frame queries."""


class FrameError(Exception):
    """Base exception for all frame errors."""

    pass


class StructuralConfigurationError(FrameError):
    """The frame topology is incomplete or inconsistent.

    Raised while a model is assembled or finalized, never lazily at query time.
    """

    pass


class InvalidStateError(FrameError):
    """A state does not belong to the model a frame was built against."""

    pass


class DegenerateTransformError(FrameError):
    """A transform can not be inverted."""

    pass


__all__ = [
    "FrameError",
    "StructuralConfigurationError",
    "InvalidStateError",
    "DegenerateTransformError",
]

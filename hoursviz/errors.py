"""Exception types raised by hoursViz."""


class HoursVizError(Exception):
    """Base class for hoursViz errors."""


class FetchError(HoursVizError):
    """Raised when time entries cannot be fetched or deserialized.

    The underlying exception (network, HTTP, timeout, JSON) is chained as
    ``__cause__``.
    """


class RenderError(HoursVizError):
    """Raised when a rendered report cannot be written to disk."""

"""Exceptions raised by the color statistics engine."""


class ColorStatsError(Exception):
    """Base class for all colorstats errors."""


class InvalidArgument(ColorStatsError, TypeError):
    """A caller passed something the API cannot accept (e.g. a non-callable callback)."""


class NoSamples(ColorStatsError, ValueError):
    """No opaque pixel was sampled, so there is nothing to average or rank."""


class DecodeError(ColorStatsError):
    """The pixel source could not produce a pixel buffer."""

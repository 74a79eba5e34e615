"""
Exceptions raised by the flight refresh pipeline.

Every failure inside a cycle is a FlightFeedError as far as the user is
concerned; the subclasses only exist so the log can say what went wrong.
"""


class FlightFeedError(Exception):
    """A refresh cycle could not produce flight data."""


class InvalidResponseError(FlightFeedError):
    """The flights endpoint answered with something other than a flight list."""

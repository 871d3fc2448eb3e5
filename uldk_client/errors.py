"""
Exceptions raised while talking to ULDK and parsing its responses.
"""


class UldkError(Exception):
    """Base class for every ULDK lookup failure."""


class NetworkError(UldkError):
    """Transport failure or non-2xx HTTP status."""


class ParseError(UldkError):
    """The service answered, but the answer could not be turned into data."""


class NotFoundError(ParseError):
    """Geometry response carried the -1 status sentinel."""


class DecodeError(ParseError):
    """A geometry line is not valid hex-encoded WKB."""

"""Exceptions raised when input does not match the request grammar."""


class ParseError(ValueError):
    """Base class for every grammar failure.

    ``offset`` is the byte position in the input where matching stopped.
    Catching this class gives the plain pass/fail behaviour.
    """

    description = "malformed request"

    def __init__(self, message=None, *, offset=0):
        self.offset = offset
        if message is None:
            message = self.description
        super().__init__(f"{message} (at offset {offset})")


class MalformedRequestLine(ParseError):
    description = "malformed request line"


class UnknownMethod(MalformedRequestLine):
    description = "unknown request method"


class MissingLeadingSlash(MalformedRequestLine):
    description = "request target must start with '/'"


class MalformedVersion(MalformedRequestLine):
    description = "expected 'HTTP/' followed by DIGITS '.' DIGITS"


class MalformedQuery(ParseError):
    description = "malformed query string"


class MissingTerminator(ParseError):
    description = "missing CRLF line terminator"


class MalformedHeaderLine(ParseError):
    description = "malformed header line"


class IncompleteConsumption(ParseError):
    """The grammar matched but input remains after the matched region."""

    description = "unexpected trailing data"


class UnencodableInput(ParseError):
    """Text input holds a character the configured charset cannot encode."""

    description = "character cannot be encoded with the configured charset"

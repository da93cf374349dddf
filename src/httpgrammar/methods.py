"""The closed set of request methods and the table used to recognise them."""
import enum
from types import MappingProxyType

from httpgrammar.errors import UnknownMethod
from httpgrammar.grammar import Match, run


class Method(str, enum.Enum):
    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    def __str__(self):
        return self.value


#: Exact, case-sensitive token -> Method mapping.  Built once, read-only.
METHOD_TABLE = MappingProxyType(
    {member.value.encode("ascii"): member for member in Method}
)


_method_token = run(b" ")


def method_rule(buf, pos):
    """Grammar rule matching one whole method token.

    The token runs up to the next space and must be in
    :data:`METHOD_TABLE` exactly; a known method that is merely a prefix of
    the token does not match.
    """
    m = _method_token(buf, pos)
    if m is None:
        return None
    method = METHOD_TABLE.get(m.value)
    if method is None:
        return None
    return Match(method, m.end)


def lookup_method(token, offset=0):
    """Return the :class:`Method` for *token* (bytes or str).

    Raises :class:`~httpgrammar.errors.UnknownMethod` unless *token* is
    exactly one of the eight known methods.
    """
    if isinstance(token, str):
        try:
            token = token.encode("ascii")
        except UnicodeEncodeError:
            raise UnknownMethod(offset=offset) from None
    try:
        return METHOD_TABLE[bytes(token)]
    except KeyError:
        raise UnknownMethod(
            f"unknown request method {bytes(token)!r}", offset=offset
        ) from None

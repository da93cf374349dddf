"""httpgrammar — grammar-based parser for HTTP/1.1 request heads."""

__version__ = "0.1.0"

from httpgrammar.config import Config
from httpgrammar.encoding import encode_request, encode_uri
from httpgrammar.errors import (
    IncompleteConsumption,
    MalformedHeaderLine,
    MalformedQuery,
    MalformedRequestLine,
    MalformedVersion,
    MissingLeadingSlash,
    MissingTerminator,
    ParseError,
    UnencodableInput,
    UnknownMethod,
)
from httpgrammar.methods import METHOD_TABLE, Method, lookup_method
from httpgrammar.query import decode_query, encode_query
from httpgrammar.request import (
    Request,
    RequestParser,
    parse,
    parse_request,
    try_parse,
)
from httpgrammar.uri import Uri, parse_uri

__all__ = [
    "__version__",
    "Config",
    "Method",
    "METHOD_TABLE",
    "lookup_method",
    "Uri",
    "Request",
    "RequestParser",
    "parse",
    "parse_request",
    "try_parse",
    "parse_uri",
    "decode_query",
    "encode_query",
    "encode_uri",
    "encode_request",
    "ParseError",
    "MalformedRequestLine",
    "UnknownMethod",
    "MissingLeadingSlash",
    "MalformedVersion",
    "MalformedQuery",
    "MissingTerminator",
    "MalformedHeaderLine",
    "IncompleteConsumption",
    "UnencodableInput",
]

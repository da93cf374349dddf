"""Request-line and header block parsing.

.. productionlist:: request
   request:     `method` SP `uri` SP `version` CRLF *`header` CRLF
   version:     "HTTP/" 1*DIGIT "." 1*DIGIT
   header:      `field_name` ":" `lws` `field_value` CRLF
   field_name:  1*<any byte except ()<>@,;:\\"/[]?={} SP HT CR LF>
   lws:         [ CRLF ] *( SP / HT )
   field_value: *<any byte up to CRLF>

The optional CRLF in ``lws`` is only honoured when
``HEADER_LINE_CONTINUATION`` is enabled.  Continuation lines are never
unfolded.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass, field
from types import MappingProxyType

from httpgrammar.config import Config
from httpgrammar.errors import (
    IncompleteConsumption,
    MalformedHeaderLine,
    MalformedRequestLine,
    MalformedVersion,
    MissingLeadingSlash,
    MissingTerminator,
    ParseError,
    UnknownMethod,
)
from httpgrammar.grammar import (
    digits,
    literal,
    optional,
    preceded,
    repeat,
    run,
    sequence,
    span,
    to_bytes,
    transform,
    until,
)
from httpgrammar.logging import create_logger
from httpgrammar.methods import Method, lookup_method, method_rule
from httpgrammar.query import decode_text
from httpgrammar.uri import Uri, build_uri, uri_rule

SP = literal(b" ")
CRLF = literal(b"\r\n")

#: Separators that may not appear in a header name.
FIELD_NAME_STOP = b'()<>@,;:\\"/[]?={} \t\r\n'

version_rule = preceded(
    literal(b"HTTP/"),
    transform(sequence(digits, literal(b"."), digits), b"".join),
)

field_name = run(FIELD_NAME_STOP)
field_value = until(b"\r\n")

lws = span(b" \t")
folding_lws = sequence(optional(CRLF), span(b" \t"))


def _header(whitespace):
    return transform(
        sequence(field_name, literal(b":"), whitespace, field_value, CRLF),
        lambda v: (v[0], v[3]),
    )


header_rule = _header(lws)
folding_header_rule = _header(folding_lws)

headers_rule = repeat(header_rule)
folding_headers_rule = repeat(folding_header_rule)


@dataclass(frozen=True)
class Request:
    method: Method
    uri: Uri
    version: str
    headers: t.Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.method, Method):
            object.__setattr__(self, "method", lookup_method(self.method))
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def version_info(self) -> tuple[int, int]:
        major, _, minor = self.version.partition(".")
        return int(major), int(minor)

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "method": self.method.value,
            "uri": self.uri.to_dict(),
            "version": self.version,
            "headers": dict(self.headers),
        }


class RequestParser:
    """Parses a buffered request line and header block.

    A parser holds only its configuration and a logger, so one instance can
    be shared between threads.
    """

    config_class = Config

    def __init__(self, config=None):
        self.config = self.config_class(defaults=config)
        self._logger = None

    @property
    def logger(self):
        if self._logger is None:
            self._logger = create_logger(self)
        return self._logger

    @property
    def charset(self) -> str:
        return self.config["CHARSET"]

    def parse(self, data, pos: int = 0) -> tuple[Request, int]:
        """Parse a request starting at *pos*.

        Returns the :class:`Request` and the offset just past the blank
        line that ends the header block.  Input after that offset is left
        alone.  Raises a :class:`~httpgrammar.errors.ParseError` subclass if
        the grammar does not match.
        """
        try:
            return self._parse(to_bytes(data, self.charset), pos)
        except ParseError as e:
            self._log_rejection(e)
            raise

    def parse_request(self, data) -> Request:
        """Parse *data* as exactly one request.

        Unless ``REQUIRE_FULL_CONSUMPTION`` is disabled, trailing bytes
        after the header block raise
        :class:`~httpgrammar.errors.IncompleteConsumption`.
        """
        try:
            buf = to_bytes(data, self.charset)
        except ParseError as e:
            self._log_rejection(e)
            raise
        request, end = self.parse(buf)
        if self.config["REQUIRE_FULL_CONSUMPTION"] and end != len(buf):
            e = IncompleteConsumption(offset=end)
            self._log_rejection(e)
            raise e
        return request

    def try_parse(self, data) -> Request | None:
        """Like :meth:`parse_request` but return ``None`` on failure."""
        try:
            return self.parse_request(data)
        except ParseError:
            return None

    def _log_rejection(self, e: ParseError) -> None:
        self.logger.debug("rejected request: %s: %s", type(e).__name__, e)

    def _parse(self, buf: bytes, pos: int) -> tuple[Request, int]:
        charset = self.charset

        m = method_rule(buf, pos)
        if m is None:
            raise UnknownMethod(offset=pos)
        method, pos = m
        pos = _expect(SP, buf, pos, MalformedRequestLine, "expected SP after method")

        m = uri_rule(buf, pos)
        if m is None:
            raise MissingLeadingSlash(offset=pos)
        uri = build_uri(m.value, charset)
        pos = _expect(
            SP, buf, m.end, MalformedRequestLine, "expected SP after request target"
        )

        m = version_rule(buf, pos)
        if m is None:
            raise MalformedVersion(offset=pos)
        version = decode_text(m.value, charset)
        pos = _expect(CRLF, buf, m.end, MissingTerminator)

        if self.config["HEADER_LINE_CONTINUATION"]:
            m = folding_headers_rule(buf, pos)
        else:
            m = headers_rule(buf, pos)
        headers = {
            decode_text(name, charset): decode_text(value, charset)
            for name, value in m.value
        }
        pos = m.end

        if CRLF(buf, pos) is None:
            # No line ending left at all means the head was cut short.
            if buf.find(b"\r\n", pos) == -1:
                raise MissingTerminator(
                    "missing blank line after header block", offset=pos
                )
            raise MalformedHeaderLine(offset=pos)
        pos += 2

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "parsed %s %s with %d header(s)", method, uri.path, len(headers)
            )
        return Request(method, uri, version, headers), pos


def _expect(rule, buf, pos, error, message=None):
    m = rule(buf, pos)
    if m is None:
        raise error(message, offset=pos)
    return m.end


default_parser = RequestParser()


def parse(data, pos=0):
    """:meth:`RequestParser.parse` with the default configuration."""
    return default_parser.parse(data, pos)


def parse_request(data):
    """:meth:`RequestParser.parse_request` with the default configuration."""
    return default_parser.parse_request(data)


def try_parse(data):
    """:meth:`RequestParser.try_parse` with the default configuration."""
    return default_parser.try_parse(data)

"""Percent-decoding of ``key=value&key=value`` query data.

.. productionlist:: query
   query: `pair` *( "&" `pair` )
   pair:  `qtoken` "=" `qtoken`
   qtoken: 1*( "%" HEXDIG HEXDIG / <any byte except "=" "&" "#" SP> )

The escape alternative is tried first, so a ``%`` that is not followed by
two hex digits is kept as a literal character.
"""
from __future__ import annotations

import typing as t
from urllib.parse import quote

from httpgrammar.errors import IncompleteConsumption, MalformedQuery
from httpgrammar.grammar import (
    Match,
    byte_not_in,
    choice,
    literal,
    preceded,
    repeat,
    separated,
    sequence,
    to_bytes,
    transform,
)

HEXDIG = frozenset(b"0123456789abcdefABCDEF")

#: Bytes that end a query token.
QUERY_STOP = b"=&# "

#: Printable characters left unescaped by :func:`encode_query`.
QUERY_SAFE = "!$'()*+,/:;?@~"


def hex_byte(buf: bytes, pos: int) -> Match | None:
    """Exactly two hex digits, decoded to a single byte."""
    pair = buf[pos:pos + 2]
    if len(pair) == 2 and pair[0] in HEXDIG and pair[1] in HEXDIG:
        return Match(bytes((int(pair, 16),)), pos + 2)
    return None


escaped = preceded(literal(b"%"), hex_byte)

qtoken = transform(
    repeat(choice(escaped, byte_not_in(QUERY_STOP)), minimum=1),
    b"".join,
)

pair = transform(sequence(qtoken, literal(b"="), qtoken), lambda v: (v[0], v[2]))

#: ``query`` rule; the value is a ``dict`` of decoded bytes.  Later
#: duplicate keys overwrite earlier ones.
query_rule = transform(separated(pair, literal(b"&")), dict)


def decode_text(raw: bytes, charset: str) -> str:
    return raw.decode(charset, "surrogateescape")


def decode_query(data, *, charset: str = "latin-1") -> dict[str, str]:
    """Decode a complete query string into a ``dict``.

    An empty input decodes to an empty ``dict``.  Raises
    :class:`~httpgrammar.errors.MalformedQuery` if no pair can be matched
    and :class:`~httpgrammar.errors.IncompleteConsumption` if input is left
    over after the last pair.
    """
    buf = to_bytes(data, charset)
    if not buf:
        return {}
    m = query_rule(buf, 0)
    if m is None:
        raise MalformedQuery(offset=0)
    if m.end != len(buf):
        raise IncompleteConsumption(offset=m.end)
    return {
        decode_text(key, charset): decode_text(value, charset)
        for key, value in m.value.items()
    }


def encode_query(mapping: t.Mapping[str, str], *, charset: str = "latin-1") -> bytes:
    """Inverse of :func:`decode_query`.

    Delimiters, ``%``, whitespace and non-printable bytes are escaped.
    Empty keys or values cannot be represented by the grammar and raise
    :class:`ValueError`.
    """
    parts = []
    for key, value in mapping.items():
        if not key or not value:
            raise ValueError(
                f"query keys and values must be non-empty: {key!r}={value!r}"
            )
        parts.append(
            _quote(key, charset) + "=" + _quote(value, charset)
        )
    return "&".join(parts).encode("ascii")


def _quote(text: str, charset: str) -> str:
    return quote(text.encode(charset, "surrogateescape"), safe=QUERY_SAFE)

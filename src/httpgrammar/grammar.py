"""Parser combinators the request, URI and query grammars are built from.

A rule is any callable taking ``(buffer, position)`` and returning either a
:class:`Match` or ``None``.  Rules never raise on malformed input; the
caller decides what a failure means at its level of the grammar.

Composition follows PEG semantics: :func:`choice` is ordered (the first
alternative that matches wins), :func:`repeat` is greedy and never gives
back what it consumed, and :func:`optional` turns a failure into an absent
value without moving the cursor.
"""
from __future__ import annotations

import typing as t

from httpgrammar.errors import UnencodableInput


class Match(t.NamedTuple):
    value: t.Any
    end: int


Rule = t.Callable[[bytes, int], t.Optional[Match]]


def literal(token: bytes) -> Rule:
    """Match *token* exactly.  The value is the token itself."""
    size = len(token)

    def rule(buf: bytes, pos: int) -> Match | None:
        if buf.startswith(token, pos):
            return Match(token, pos + size)
        return None

    return rule


def run(excluded: bytes, minimum: int = 1) -> Rule:
    """Greedy run of bytes that are not in *excluded*.

    The value is the matched slice.  Fails if fewer than *minimum* bytes
    are available.
    """
    stop = frozenset(excluded)

    def rule(buf: bytes, pos: int) -> Match | None:
        end = pos
        size = len(buf)
        while end < size and buf[end] not in stop:
            end += 1
        if end - pos < minimum:
            return None
        return Match(buf[pos:end], end)

    return rule


def span(allowed: bytes, minimum: int = 0) -> Rule:
    """Greedy run of bytes that are all in *allowed*."""
    keep = frozenset(allowed)

    def rule(buf: bytes, pos: int) -> Match | None:
        end = pos
        size = len(buf)
        while end < size and buf[end] in keep:
            end += 1
        if end - pos < minimum:
            return None
        return Match(buf[pos:end], end)

    return rule


def until(terminator: bytes) -> Rule:
    """Everything up to (not including) *terminator*, or to the end.

    Always matches, possibly with an empty value.
    """

    def rule(buf: bytes, pos: int) -> Match:
        end = buf.find(terminator, pos)
        if end == -1:
            end = len(buf)
        return Match(buf[pos:end], end)

    return rule


def byte_not_in(excluded: bytes) -> Rule:
    """Exactly one byte that is not in *excluded*."""
    stop = frozenset(excluded)

    def rule(buf: bytes, pos: int) -> Match | None:
        if pos < len(buf) and buf[pos] not in stop:
            return Match(buf[pos:pos + 1], pos + 1)
        return None

    return rule


def digits(buf: bytes, pos: int) -> Match | None:
    """One or more ASCII digits."""
    end = pos
    size = len(buf)
    while end < size and 0x30 <= buf[end] <= 0x39:
        end += 1
    if end == pos:
        return None
    return Match(buf[pos:end], end)


def sequence(*rules: Rule) -> Rule:
    """All of *rules* in order.  The value is the list of their values."""

    def rule(buf: bytes, pos: int) -> Match | None:
        values = []
        for sub in rules:
            m = sub(buf, pos)
            if m is None:
                return None
            values.append(m.value)
            pos = m.end
        return Match(values, pos)

    return rule


def choice(*rules: Rule) -> Rule:
    """Ordered choice: the first alternative that matches wins."""

    def rule(buf: bytes, pos: int) -> Match | None:
        for sub in rules:
            m = sub(buf, pos)
            if m is not None:
                return m
        return None

    return rule


def optional(sub: Rule) -> Rule:
    def rule(buf: bytes, pos: int) -> Match:
        m = sub(buf, pos)
        if m is None:
            return Match(None, pos)
        return m

    return rule


def repeat(sub: Rule, minimum: int = 0) -> Rule:
    """Greedy repetition.  The value is the list of matched values."""

    def rule(buf: bytes, pos: int) -> Match | None:
        values = []
        while True:
            m = sub(buf, pos)
            # A rule that matched without consuming would loop forever.
            if m is None or m.end == pos:
                break
            values.append(m.value)
            pos = m.end
        if len(values) < minimum:
            return None
        return Match(values, pos)

    return rule


def separated(sub: Rule, separator: Rule) -> Rule:
    """One or more *sub* matches delimited by *separator*.

    A trailing separator that is not followed by another *sub* match is
    left unconsumed.
    """

    def rule(buf: bytes, pos: int) -> Match | None:
        first = sub(buf, pos)
        if first is None:
            return None
        values = [first.value]
        pos = first.end
        while True:
            sep = separator(buf, pos)
            if sep is None:
                break
            nxt = sub(buf, sep.end)
            if nxt is None:
                break
            values.append(nxt.value)
            pos = nxt.end
        return Match(values, pos)

    return rule


def preceded(prefix: Rule, sub: Rule) -> Rule:
    """*prefix* then *sub*, keeping only the value of *sub*."""

    def rule(buf: bytes, pos: int) -> Match | None:
        m = prefix(buf, pos)
        if m is None:
            return None
        return sub(buf, m.end)

    return rule


def transform(sub: Rule, fn: t.Callable[[t.Any], t.Any]) -> Rule:
    """Apply *fn* to the value of a successful *sub* match."""

    def rule(buf: bytes, pos: int) -> Match | None:
        m = sub(buf, pos)
        if m is None:
            return None
        return Match(fn(m.value), m.end)

    return rule


def to_bytes(data: t.Any, charset: str = "latin-1") -> bytes:
    """Coerce parser input to ``bytes``.

    ``str`` input is encoded with *charset*.  A character the charset
    cannot represent raises :class:`~httpgrammar.errors.UnencodableInput`
    at its byte offset.  Any other type that is not bytes-like raises
    :class:`TypeError`.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return data.encode(charset, "surrogateescape")
        except UnicodeEncodeError as e:
            offset = len(data[:e.start].encode(charset, "surrogateescape"))
            raise UnencodableInput(
                f"cannot encode {data[e.start:e.end]!r} with {charset!r}",
                offset=offset,
            ) from e
    raise TypeError(
        f"expected bytes-like object or str, not {type(data).__name__!r}"
    )

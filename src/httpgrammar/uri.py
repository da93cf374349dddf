"""Origin-form request target parsing.

.. productionlist:: uri
   uri:       "/" [ `root` ] [ "/" `hierarchy` ] [ "?" `query` ] [ "#" `fragment` ]
   root:      1*<any byte except "/" "?" "#" SP>
   hierarchy: 1*<any byte except "?" "#" SP>
   fragment:  1*<any byte except SP>

Every component after the leading slash is optional.  When a delimiter is
present but what follows it does not match, the component is absent and
the cursor is left on the delimiter.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from types import MappingProxyType

from httpgrammar.errors import IncompleteConsumption, MissingLeadingSlash
from httpgrammar.grammar import (
    literal,
    optional,
    preceded,
    run,
    sequence,
    to_bytes,
)
from httpgrammar.query import decode_text, query_rule


@dataclass(frozen=True)
class Uri:
    root: t.Optional[str] = None
    hierarchy: t.Optional[str] = None
    queries: t.Optional[t.Mapping[str, str]] = None
    fragment: t.Optional[str] = None

    def __post_init__(self):
        if self.root == "":
            raise ValueError("root must be None or a non-empty string")
        # An empty mapping is stored as an absent query.
        if self.queries is not None and not self.queries:
            object.__setattr__(self, "queries", None)
        elif self.queries is not None and not isinstance(self.queries, MappingProxyType):
            object.__setattr__(self, "queries", MappingProxyType(dict(self.queries)))

    @property
    def path(self) -> str:
        """The path portion of the target, leading slash included."""
        path = "/" + (self.root or "")
        if self.hierarchy is not None:
            path += "/" + self.hierarchy
        return path

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "root": self.root,
            "hierarchy": self.hierarchy,
            "queries": None if self.queries is None else dict(self.queries),
            "fragment": self.fragment,
        }


#: ``uri`` rule; the value is ``[b"/", root, hierarchy, queries, fragment]``
#: with raw bytes (or ``None``) for each component.
uri_rule = sequence(
    literal(b"/"),
    optional(run(b"/?# ")),
    optional(preceded(literal(b"/"), run(b"?# "))),
    optional(preceded(literal(b"?"), query_rule)),
    optional(preceded(literal(b"#"), run(b" "))),
)


def build_uri(value, charset: str = "latin-1") -> Uri:
    """Turn the raw value of :data:`uri_rule` into a :class:`Uri`."""
    _, root, hierarchy, queries, fragment = value

    def text(raw):
        return None if raw is None else decode_text(raw, charset)

    if queries is not None:
        queries = {
            decode_text(key, charset): decode_text(val, charset)
            for key, val in queries.items()
        }
    return Uri(
        root=text(root),
        hierarchy=text(hierarchy),
        queries=queries,
        fragment=text(fragment),
    )


def parse_uri(data, *, charset: str = "latin-1") -> Uri:
    """Parse a complete origin-form target such as ``/a/b?x=1#top``.

    Raises :class:`~httpgrammar.errors.MissingLeadingSlash` when *data*
    does not start with ``/`` and
    :class:`~httpgrammar.errors.IncompleteConsumption` when the grammar
    stops before the end of *data*.
    """
    buf = to_bytes(data, charset)
    m = uri_rule(buf, 0)
    if m is None:
        raise MissingLeadingSlash(offset=0)
    if m.end != len(buf):
        raise IncompleteConsumption(offset=m.end)
    return build_uri(m.value, charset)

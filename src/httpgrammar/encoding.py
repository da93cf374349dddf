"""Canonical serialisation of parsed requests.

Feeding the output of :func:`encode_request` back to the parser yields an
equal :class:`~httpgrammar.request.Request`.  Only the query component is
re-escaped; every other field is written back byte for byte.
"""
from httpgrammar.query import encode_query


def _raw(text, charset):
    return text.encode(charset, "surrogateescape")


def encode_uri(uri, *, charset="latin-1"):
    target = b"/"
    if uri.root is not None:
        target += _raw(uri.root, charset)
    if uri.hierarchy is not None:
        target += b"/" + _raw(uri.hierarchy, charset)
    if uri.queries is not None:
        target += b"?" + encode_query(uri.queries, charset=charset)
    if uri.fragment is not None:
        target += b"#" + _raw(uri.fragment, charset)
    return target


def encode_request(request, *, charset="latin-1"):
    """Render *request* as a request line, header lines and a blank line."""
    lines = [
        b" ".join((
            _raw(request.method.value, "ascii"),
            encode_uri(request.uri, charset=charset),
            b"HTTP/" + _raw(request.version, "ascii"),
        ))
    ]
    for name, value in request.headers.items():
        lines.append(_raw(name, charset) + b": " + _raw(value, charset))
    return b"\r\n".join(lines) + b"\r\n\r\n"

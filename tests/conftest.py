"""Shared test fixtures for httpgrammar."""
import pytest

from httpgrammar import RequestParser


def make_request(method="GET", target="/", version="1.1", headers=None):
    """Build raw request-head bytes for testing."""
    lines = [f"{method} {target} HTTP/{version}"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1")


@pytest.fixture
def build_request():
    return make_request


@pytest.fixture
def parser():
    return RequestParser()


@pytest.fixture
def folding_parser():
    return RequestParser({"HEADER_LINE_CONTINUATION": True})

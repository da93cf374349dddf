"""Tests for parser logging."""
import logging

import pytest

from httpgrammar import ParseError, RequestParser
from httpgrammar.logging import create_logger, default_handler, has_level_handler


@pytest.fixture
def logger_name(request):
    name = f"httpgrammar.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestCreateLogger:
    def test_uses_logger_name(self, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        assert parser.logger.name == logger_name

    def test_default_name(self):
        assert RequestParser().logger.name == "httpgrammar"

    def test_logger_is_cached(self, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        assert parser.logger is parser.logger

    def test_debug_sets_level(self, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name, "DEBUG": True})
        assert parser.logger.level == logging.DEBUG

    def test_no_debug_leaves_level(self, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        assert parser.logger.level == logging.NOTSET

    def test_default_handler_added_without_handlers(self, logger_name):
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        try:
            create_logger(RequestParser({"LOGGER_NAME": logger_name}))
            assert default_handler in logger.handlers
        finally:
            logger.propagate = True

    def test_existing_handler_respected(self, logger_name):
        logger = logging.getLogger(logger_name)
        logger.addHandler(logging.NullHandler())
        create_logger(RequestParser({"LOGGER_NAME": logger_name}))
        assert default_handler not in logger.handlers
        assert has_level_handler(logger)


class TestParserLogging:
    def test_rejection_logged_at_debug(self, caplog, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        caplog.set_level(logging.DEBUG, logger=logger_name)
        with pytest.raises(ParseError):
            parser.parse(b"PATCH / HTTP/1.1\r\n\r\n")
        assert "UnknownMethod" in caplog.text

    def test_trailing_data_logged(self, caplog, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        caplog.set_level(logging.DEBUG, logger=logger_name)
        assert parser.try_parse(b"GET / HTTP/1.1\r\n\r\nx") is None
        assert "IncompleteConsumption" in caplog.text

    def test_success_logged_at_debug(self, caplog, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        caplog.set_level(logging.DEBUG, logger=logger_name)
        parser.parse(b"GET /a/b HTTP/1.1\r\nHost: x\r\n\r\n")
        assert "parsed GET /a/b with 1 header(s)" in caplog.text

    def test_success_not_formatted_without_debug(self, logger_name, monkeypatch):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        parser.logger.setLevel(logging.INFO)
        calls = []
        monkeypatch.setattr(parser.logger, "debug", lambda *a, **kw: calls.append(a))
        parser.parse(b"GET /a HTTP/1.1\r\n\r\n")
        assert calls == []

    def test_unencodable_input_logged(self, caplog, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        caplog.set_level(logging.DEBUG, logger=logger_name)
        assert parser.try_parse("GET /€ HTTP/1.1\r\n\r\n") is None
        assert "UnencodableInput" in caplog.text

    def test_quiet_by_default(self, caplog, logger_name):
        parser = RequestParser({"LOGGER_NAME": logger_name})
        caplog.set_level(logging.WARNING)
        parser.try_parse(b"")
        assert caplog.records == []

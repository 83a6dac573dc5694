"""Tests for sessig.logging."""

from __future__ import annotations

import io
import logging

import structlog

from sessig.envelope import Envelope
from sessig.logging import setup_logging
from sessig.sigv4 import Credentials, SigningContext, SigningRequest, sign


class TestSetupLogging:
    def teardown_method(self):
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_json_mode(self):
        setup_logging(json=True, level='INFO')
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_console_mode(self):
        setup_logging(json=False, level='DEBUG')
        assert logging.getLogger().level == logging.DEBUG

    def test_level_case_insensitive(self):
        setup_logging(level='warning')
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_existing_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())
        setup_logging()
        assert len(root.handlers) == 1

    def test_signing_never_logs_the_secret(self, capsys):
        setup_logging(json=True, level='DEBUG')
        credentials = Credentials('AKIDEXAMPLE', 'very-secret-key')
        context = SigningContext('20231215T120000Z', '20231215')
        sign(credentials, SigningRequest('GetSendQuota', 'GET'), context)

        err = capsys.readouterr().err
        assert 'request_signed' in err
        assert 'GetSendQuota' in err
        assert 'very-secret-key' not in err

    def test_custom_stream(self):
        stream = io.StringIO()
        setup_logging(json=True, level='DEBUG', stream=stream)
        envelope = Envelope('s@example.com', 'Subject', 'Body')
        envelope.add_to('to@example.com')
        envelope.build_parameters()

        assert 'envelope_serialized' in stream.getvalue()
        assert 'Body' not in stream.getvalue()

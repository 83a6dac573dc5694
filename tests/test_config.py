"""Tests for sessig.config."""

from __future__ import annotations

import pytest
from pydantic import SecretStr, ValidationError

from sessig.config import SesSettings
from sessig.sigv4 import Credentials


class TestSesSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('AWS_REGION', raising=False)
        cfg = SesSettings(access_key_id='AKID', secret_access_key='secret')
        assert cfg.region == 'us-east-1'

    def test_secret_is_hidden(self):
        cfg = SesSettings(access_key_id='AKID', secret_access_key='hunter2')
        assert isinstance(cfg.secret_access_key, SecretStr)
        assert 'hunter2' not in repr(cfg)
        assert cfg.secret_access_key.get_secret_value() == 'hunter2'

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'AKIAENV')
        monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'envsecret')
        monkeypatch.setenv('AWS_REGION', 'eu-central-1')
        cfg = SesSettings()
        assert cfg.access_key_id == 'AKIAENV'
        assert cfg.region == 'eu-central-1'

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv('AWS_ACCESS_KEY_ID', raising=False)
        monkeypatch.delenv('AWS_SECRET_ACCESS_KEY', raising=False)
        with pytest.raises(ValidationError):
            SesSettings()

    def test_to_credentials(self):
        cfg = SesSettings(access_key_id='AKID', secret_access_key='secret', region='us-west-2')
        assert cfg.to_credentials() == Credentials('AKID', 'secret', 'us-west-2')

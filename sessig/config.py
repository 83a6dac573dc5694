"""Credentials and region loaded from environment variables.

Uses pydantic-settings so every field can be overridden via the usual
``AWS_ACCESS_KEY_ID`` / ``AWS_SECRET_ACCESS_KEY`` / ``AWS_REGION`` variables.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

from .sigv4 import DEFAULT_REGION, Credentials


class SesSettings(BaseSettings):
    """Signing credentials for the email-sending API."""

    model_config = {'env_prefix': 'AWS_'}

    access_key_id: str = Field(description='AWS access key ID')
    secret_access_key: SecretStr = Field(description='AWS secret access key')
    region: str = Field(default=DEFAULT_REGION, description='AWS region of the email endpoint')

    def to_credentials(self) -> Credentials:
        return Credentials(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key.get_secret_value(),
            region=self.region,
        )

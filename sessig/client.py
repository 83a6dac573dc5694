"""
Signed, ready-to-send requests for the email-sending API.

:class:`SesClient` turns an :class:`~sessig.envelope.Envelope` or an identity
builder into a :class:`PreparedRequest`. Issuing it over HTTP is left to the
caller.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from . import identity
from .config import SesSettings
from .envelope import Envelope
from .sigv4 import Credentials, Headers, SigningContext, SigningRequest, SigV4Signer


@dataclass(frozen=True)
class PreparedRequest:
    action: str
    method: str
    url: str
    headers: Headers


class SesClient:
    def __init__(self, credentials: Credentials, endpoint: Optional[str] = None) -> None:
        self.signer = SigV4Signer(credentials)
        self.endpoint = endpoint

    @classmethod
    def from_settings(cls, settings: Optional[SesSettings] = None) -> 'SesClient':
        settings = settings or SesSettings()
        return cls(settings.to_credentials())

    def prepare(self, request: SigningRequest, context: Optional[SigningContext] = None) -> PreparedRequest:
        signed = self.signer.sign_request(request, context)
        return PreparedRequest(
            action=request.action,
            method=signed.method,
            url=signed.url(self.endpoint),
            headers=signed.headers,
        )

    def send_email(self, envelope: Envelope, context: Optional[SigningContext] = None) -> PreparedRequest:
        """
        Raises:
            ValidationError: before anything is signed, if the envelope is incomplete
        """
        return self.prepare(identity.send_email(envelope), context)

    def list_identities(self, identity_type: str = '') -> PreparedRequest:
        return self.prepare(identity.list_identities(identity_type))

    def verify_email_identity(self, email: str) -> PreparedRequest:
        return self.prepare(identity.verify_email_identity(email))

    def delete_identity(self, name: str) -> PreparedRequest:
        return self.prepare(identity.delete_identity(name))

    def get_identity_verification_attributes(self, identities: Iterable[str]) -> PreparedRequest:
        return self.prepare(identity.get_identity_verification_attributes(identities))

    def get_send_quota(self) -> PreparedRequest:
        return self.prepare(identity.get_send_quota())

    def get_send_statistics(self) -> PreparedRequest:
        return self.prepare(identity.get_send_statistics())

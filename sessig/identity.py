"""
Request builders for identity management and account queries.

Each builder validates its input and returns a :class:`SigningRequest`; signing
and transport happen elsewhere.
"""

import re
from typing import Iterable

from email_validator import EmailNotValidError, validate_email

from .envelope import Envelope
from .errors import FormatError
from .sigv4 import SigningRequest

IDENTITY_TYPES = ('EmailAddress', 'Domain', '')

_DOMAIN = re.compile(r'^([a-z\d]+(-[a-z\d]+)*\.)+[a-z]{2,}$')


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_domain(value: str) -> bool:
    return bool(_DOMAIN.match(value))


def _check_identity(identity: str) -> None:
    if not (is_email(identity) or is_domain(identity)):
        raise FormatError(f'identity must be an email address or a domain: {identity!r}')


def list_identities(identity_type: str = '') -> SigningRequest:
    if identity_type not in IDENTITY_TYPES:
        raise FormatError('IdentityType must be EmailAddress or Domain')
    parameters = {'IdentityType': identity_type} if identity_type else {}
    return SigningRequest('ListIdentities', 'GET', parameters)


def verify_email_identity(email: str) -> SigningRequest:
    if not is_email(email):
        raise FormatError(f'invalid email: {email!r}')
    return SigningRequest('VerifyEmailIdentity', 'GET', {'EmailAddress': email})


def delete_identity(identity: str) -> SigningRequest:
    _check_identity(identity)
    return SigningRequest('DeleteIdentity', 'GET', {'Identity': identity})


def get_identity_verification_attributes(identities: Iterable[str]) -> SigningRequest:
    parameters = {}
    for index, identity in enumerate(identities, start=1):
        _check_identity(identity)
        parameters[f'Identities.member.{index}'] = identity
    return SigningRequest('GetIdentityVerificationAttributes', 'GET', parameters)


def get_send_quota() -> SigningRequest:
    return SigningRequest('GetSendQuota', 'GET')


def get_send_statistics() -> SigningRequest:
    return SigningRequest('GetSendStatistics', 'GET')


def send_email(envelope: Envelope) -> SigningRequest:
    """``SendEmail`` or ``SendRawEmail``, depending on the envelope's attachments."""
    serialized = envelope.build_parameters()
    return SigningRequest(serialized.action, 'POST', serialized.parameters)

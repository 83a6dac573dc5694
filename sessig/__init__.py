"""
SigV4 signing and message envelopes for the email-sending API

This package signs query-API calls with AWS Signature Version 4 and turns
structured emails into either SendEmail parameters or a raw MIME document.
It does not perform HTTP requests.
"""

from .client import PreparedRequest, SesClient
from .config import SesSettings
from .envelope import Attachment, Envelope, SerializedEnvelope
from .errors import FormatError, InvalidInput, ServiceError, SesError, ValidationCode, ValidationError
from .mime import encode_header
from .sigv4 import (
    Credentials,
    Headers,
    Service,
    SignedRequest,
    SigningContext,
    SigningRequest,
    SigV4Signer,
    sign,
)

__version__ = '0.1.0'
__all__ = [
    'Attachment',
    'Credentials',
    'Envelope',
    'FormatError',
    'Headers',
    'InvalidInput',
    'PreparedRequest',
    'SerializedEnvelope',
    'Service',
    'ServiceError',
    'SesClient',
    'SesError',
    'SesSettings',
    'SigV4Signer',
    'SignedRequest',
    'SigningContext',
    'SigningRequest',
    'ValidationCode',
    'ValidationError',
    'encode_header',
    'sign',
]

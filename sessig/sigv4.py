"""
AWS Signature Version 4 for the email-sending query API.

Every call is authenticated by signing the sorted query string together with the
``host`` and ``x-amz-date`` headers. Requests never carry a body, so the payload
hash is always the digest of the empty string.

see: https://docs.aws.amazon.com/general/latest/gr/sigv4_signing.html
"""

import hashlib
import hmac
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
from urllib.parse import quote

import structlog

from .errors import InvalidInput

Headers = Dict[str, str]
Parameters = Mapping[str, str]

ALGORITHM = 'AWS4-HMAC-SHA256'
DOMAIN = 'amazonaws.com'
DEFAULT_REGION = 'us-east-1'
SIGNED_HEADERS = 'host;x-amz-date'
EMPTY_PAYLOAD_HASH = hashlib.sha256(b'').hexdigest()
SCOPE_TERMINATOR = 'aws4_request'

logger = structlog.get_logger()


class Service(str, Enum):
    EMAIL = 'email'


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str = field(repr=False)
    region: str = DEFAULT_REGION


@dataclass(frozen=True)
class SigningContext:
    """The ``x-amz-date`` timestamp and its date stamp, taken from one instant."""

    amz_date: str
    date: str

    @classmethod
    def from_datetime(cls, moment: datetime) -> 'SigningContext':
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        moment = moment.astimezone(timezone.utc)
        return cls(amz_date=moment.strftime('%Y%m%dT%H%M%SZ'), date=moment.strftime('%Y%m%d'))

    @classmethod
    def now(cls) -> 'SigningContext':
        return cls.from_datetime(datetime.now(timezone.utc))


@dataclass(frozen=True)
class SigningRequest:
    """Everything that varies between two signed calls except the clock."""

    action: str
    method: str
    parameters: Parameters = field(default_factory=dict, hash=False)
    region: Optional[str] = None
    service: str = Service.EMAIL.value

    def __post_init__(self) -> None:
        # a private read-only copy; the caller's mapping is never touched
        object.__setattr__(self, 'parameters', MappingProxyType(dict(self.parameters)))
        if isinstance(self.service, Service):
            object.__setattr__(self, 'service', self.service.value)


@dataclass(frozen=True)
class SignedRequest:
    authorization: str
    amz_date: str
    query_string: str
    host: str
    method: str

    @property
    def headers(self) -> Headers:
        return {'Authorization': self.authorization, 'x-amz-date': self.amz_date}

    def url(self, endpoint: Optional[str] = None) -> str:
        base = endpoint or f'https://{self.host}'
        return f'{base.rstrip("/")}/?{self.query_string}'


def host_for_region(region: str, service: str = Service.EMAIL.value) -> str:
    return f'{service}.{region}.{DOMAIN}'


def _uri_encode(value: str) -> str:
    # RFC 3986 unreserved characters only; space becomes %20
    return quote(value, safe='-_.~')


def canonical_query_string(parameters: Parameters) -> str:
    return '&'.join(
        f'{_uri_encode(str(key))}={_uri_encode(str(value))}'
        for key, value in sorted(parameters.items())
    )


def canonical_headers(host: str, amz_date: str) -> str:
    return f'host:{host}\nx-amz-date:{amz_date}\n'


def canonical_request(method: str, query_string: str, host: str, amz_date: str) -> str:
    return '\n'.join([
        method,
        '/',
        query_string,
        canonical_headers(host, amz_date),
        SIGNED_HEADERS,
        EMPTY_PAYLOAD_HASH,
    ])


def credential_scope(date: str, region: str, service: str = Service.EMAIL.value) -> str:
    return f'{date}/{region}/{service}/{SCOPE_TERMINATOR}'


def string_to_sign(amz_date: str, scope: str, request: str) -> str:
    return '\n'.join([
        ALGORITHM,
        amz_date,
        scope,
        hashlib.sha256(request.encode('utf-8')).hexdigest(),
    ])


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode('utf-8'), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, date: str, region: str, service: str = Service.EMAIL.value) -> bytes:
    k_date = _hmac(f'AWS4{secret_key}'.encode('utf-8'), date)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, SCOPE_TERMINATOR)


def sign(
        credentials: Credentials,
        request: SigningRequest,
        context: Optional[SigningContext] = None
) -> SignedRequest:
    """
    Sign one API call.

    The returned value carries the ``Authorization`` and ``x-amz-date`` header
    values and the canonical query string that must be sent verbatim.

    Raises:
        InvalidInput: if the region, service, method or action is empty
    """
    region = credentials.region if request.region is None else request.region
    if not region:
        raise InvalidInput('region must not be empty')
    if not request.service:
        raise InvalidInput('service must not be empty')
    if not request.method:
        raise InvalidInput('method must not be empty')
    if not request.action and 'Action' not in request.parameters:
        raise InvalidInput('action must not be empty')

    context = context or SigningContext.now()
    method = request.method.upper()
    host = host_for_region(region, request.service)

    parameters = dict(request.parameters)
    parameters.setdefault('Action', request.action)
    query_string = canonical_query_string(parameters)

    scope = credential_scope(context.date, region, request.service)
    to_sign = string_to_sign(
        context.amz_date,
        scope,
        canonical_request(method, query_string, host, context.amz_date),
    )
    signing_key = derive_signing_key(credentials.secret_access_key, context.date, region, request.service)
    signature = hmac.new(signing_key, to_sign.encode('utf-8'), hashlib.sha256).hexdigest()

    authorization = (
        f'{ALGORITHM} Credential={credentials.access_key_id}/{scope}, '
        f'SignedHeaders={SIGNED_HEADERS}, Signature={signature}'
    )
    logger.debug(
        'request_signed',
        action=parameters['Action'],
        method=method,
        region=region,
        amz_date=context.amz_date,
    )
    return SignedRequest(
        authorization=authorization,
        amz_date=context.amz_date,
        query_string=query_string,
        host=host,
        method=method,
    )


class SigV4Signer:
    """Holds one set of credentials and signs calls against the email service."""

    def __init__(self, credentials: Credentials, service: Union[Service, str] = Service.EMAIL) -> None:
        self.credentials = credentials
        self.service = service

    def sign(
            self,
            action: str,
            method: str,
            parameters: Optional[Parameters] = None,
            region: Optional[str] = None,
            context: Optional[SigningContext] = None
    ) -> SignedRequest:
        request = SigningRequest(
            action=action,
            method=method,
            parameters=parameters or {},
            region=region,
            service=self.service,
        )
        return sign(self.credentials, request, context)

    def sign_request(self, request: SigningRequest, context: Optional[SigningContext] = None) -> SignedRequest:
        return sign(self.credentials, request, context)

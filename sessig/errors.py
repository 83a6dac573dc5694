"""
Error types raised while signing requests and building envelopes.

Service error descriptions follow:
https://docs.aws.amazon.com/ses/latest/DeveloperGuide/api-error-codes.html
"""

from enum import Enum
from typing import Optional


class SesError(Exception):
    """Base class for every error raised by this package."""


class InvalidInput(SesError, ValueError):
    """An argument that can never produce a well-formed request."""


class FormatError(SesError, ValueError):
    """A malformed identity (email address or domain) string."""


class ValidationCode(str, Enum):
    MISSING_DESTINATION = 'MissingDestination'
    MISSING_SOURCE = 'MissingSource'
    MISSING_SUBJECT = 'MissingSubject'
    MISSING_BODY = 'MissingBody'


VALIDATION_DESCRIPTIONS = {
    ValidationCode.MISSING_DESTINATION: 'The destination composed To: or CC:, Bcc: is required.',
    ValidationCode.MISSING_SOURCE: 'The email From: is required.',
    ValidationCode.MISSING_SUBJECT: 'The email Subject: is required.',
    ValidationCode.MISSING_BODY: 'The email Body: is required.',
}


class ValidationError(SesError):
    """Raised before any signing when an envelope is incomplete."""

    def __init__(self, code: ValidationCode) -> None:
        self.code = ValidationCode(code)
        self.description = VALIDATION_DESCRIPTIONS[self.code]
        super().__init__(f'{self.code.value}: {self.description}')


SERVICE_ERROR_DESCRIPTIONS = {
    'AccessDeniedException': 'You do not have sufficient access to perform this action.',
    'ConfigurationSetDoesNotExist': (
        'The specified configuration set does not exist. A configuration set is an '
        'optional parameter that you use to publish email sending events.'
    ),
    'IncompleteSignature': 'The request signature does not conform to AWS standards.',
    'InternalFailure': (
        'The request processing has failed because of an unknown error, exception, or failure.'
    ),
    'InvalidAction': 'The requested action or operation is invalid. Verify that the action is typed correctly.',
    'InvalidClientTokenId': (
        'The X.509 certificate or AWS access key ID provided does not exist in our records.'
    ),
    'InvalidParameterCombination': 'Parameters that must not be used together were used together.',
    'InvalidParameterValue': 'An invalid or out-of-range value was supplied for the input parameter.',
    'InvalidQueryParameter': 'The AWS query string is malformed, does not adhere to AWS standards.',
    'MailFromDomainNotVerified': (
        'The message could not be sent because Amazon SES could not read the MX record '
        'required to use the specified MAIL FROM domain.'
    ),
    'MalformedQueryString': 'The query string contains a syntax error.',
    'MessageRejected': (
        'Indicates that the action failed, and the message could not be sent. '
        'Check the error stack for a description of what caused the error.'
    ),
    'MissingAction': 'The request is missing an action or a required parameter.',
    'MissingAuthenticationToken': (
        'The request must contain either a valid (registered) AWS access key ID or X.509 certificate.'
    ),
    'MissingParameter': 'A required parameter for the specified action is not supplied.',
    'OptInRequired': 'The AWS access key ID needs a subscription for the service.',
    'RequestExpired': (
        'The request reached the service more than 15 minutes after the date stamp on the '
        'request or more than 15 minutes after the request expiration date, or the date '
        'stamp on the request is more than 15 minutes in the future.'
    ),
    'ServiceUnavailable': 'The request failed due to a temporary failure of the server.',
    'SignatureDoesNotMatch': (
        'The request signature we calculated does not match the signature you provided.'
    ),
    'Throttling': 'The request was denied due to request throttling.',
    'ValidationError': 'The input fails to satisfy the constraints specified by the service.',
}


class ServiceError(SesError):
    """An error code returned by the service, with its catalogued description."""

    def __init__(self, code: str, message: Optional[str] = None) -> None:
        self.code = code
        self.description = SERVICE_ERROR_DESCRIPTIONS.get(code, '')
        if message is None:
            message = f'{code}: {self.description}' if self.description else code
        super().__init__(message)

    @property
    def is_known(self) -> bool:
        return self.code in SERVICE_ERROR_DESCRIPTIONS

"""
Envelopes: one outbound email before it is turned into request parameters.

An envelope without attachments serializes to the structured ``SendEmail``
parameters. As soon as one attachment is added it serializes to a single
``RawMessage.Data`` document for ``SendRawEmail`` instead.
"""

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import structlog

from .errors import InvalidInput, ValidationCode, ValidationError
from .mime import BoundarySource, build_raw_message, default_boundary, encode_raw_message

DEFAULT_CHARSET = 'UTF-8'
DEFAULT_MIME_TYPE = 'application/octet-stream'

SEND_EMAIL = 'SendEmail'
SEND_RAW_EMAIL = 'SendRawEmail'

Addresses = Union[str, Iterable[str]]

logger = structlog.get_logger()


@dataclass(frozen=True)
class Attachment:
    name: str
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE
    content_id: Optional[str] = None


@dataclass(frozen=True)
class SerializedEnvelope:
    """Request parameters for one send call and the action that carries them."""

    action: str
    parameters: Dict[str, str]

    @property
    def raw(self) -> bool:
        return self.action == SEND_RAW_EMAIL


def _check_header_value(value: Optional[str], field: str) -> None:
    # raw header lines are written verbatim
    if value and ('\r' in value or '\n' in value):
        raise InvalidInput(f'{field} must not contain line breaks: {value!r}')


def _merge_unique(current: List[str], addresses: Addresses) -> None:
    if isinstance(addresses, str):
        addresses = [addresses]
    addresses = list(addresses)
    for address in addresses:
        _check_header_value(address, 'address')
    for address in addresses:
        if address not in current:
            current.append(address)


def _indexed(prefix: str, values: Iterable[str]) -> Dict[str, str]:
    return {f'{prefix}.member.{index}': value for index, value in enumerate(values, start=1)}


class Envelope:
    """
    A single email: sender, recipients, subject, bodies and attachments.

    Build it, add recipients and attachments, then call :meth:`build_parameters`
    exactly once. Recipient lists drop duplicates and keep first-insertion order.
    """

    def __init__(
            self,
            source: str,
            subject: str,
            text_body: str = '',
            html_body: str = '',
            charset: str = DEFAULT_CHARSET,
            boundary_source: Optional[BoundarySource] = None
    ) -> None:
        self.source = source
        self.subject = subject
        self.text_body = text_body
        self.html_body = html_body
        self.charset = DEFAULT_CHARSET
        self.return_path: Optional[str] = None
        self.to: List[str] = []
        self.cc: List[str] = []
        self.bcc: List[str] = []
        self.reply_to: List[str] = []
        self.attachments: List[Attachment] = []
        self._boundary_source = boundary_source or default_boundary
        self._consumed = False
        self.set_charset(charset)

    def add_to(self, addresses: Addresses) -> None:
        _merge_unique(self.to, addresses)

    def add_cc(self, addresses: Addresses) -> None:
        _merge_unique(self.cc, addresses)

    def add_bcc(self, addresses: Addresses) -> None:
        _merge_unique(self.bcc, addresses)

    def add_reply_to(self, addresses: Addresses) -> None:
        _merge_unique(self.reply_to, addresses)

    def set_charset(self, charset: str) -> None:
        try:
            codecs.lookup(charset)
        except LookupError as e:
            raise InvalidInput(f'unknown charset: {charset!r}') from e
        self.charset = charset

    def set_return_path(self, address: str) -> None:
        self.return_path = address

    def add_attachment(
            self,
            name: str,
            data: Union[bytes, str],
            mime_type: str = DEFAULT_MIME_TYPE,
            content_id: Optional[str] = None
    ) -> Attachment:
        _check_header_value(name, 'attachment name')
        _check_header_value(mime_type, 'attachment MIME type')
        _check_header_value(content_id, 'attachment content id')
        if isinstance(data, str):
            try:
                data = data.encode(self.charset)
            except UnicodeEncodeError as e:
                raise InvalidInput(f'attachment cannot be encoded as {self.charset}: {e}') from e
        attachment = Attachment(name=name, data=bytes(data), mime_type=mime_type, content_id=content_id)
        self.attachments.append(attachment)
        return attachment

    def add_attachment_from_file(
            self,
            path: Union[str, os.PathLike],
            name: Optional[str] = None,
            mime_type: str = DEFAULT_MIME_TYPE,
            content_id: Optional[str] = None
    ) -> Attachment:
        path = Path(path)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise InvalidInput(f'attachment is not a readable file: {path}')
        return self.add_attachment(name or path.name, path.read_bytes(), mime_type, content_id)

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)

    def validate(self) -> None:
        """
        Raises:
            ValidationError: the first missing piece, in the order destination,
                source, subject, body
        """
        if not (self.to or self.cc or self.bcc):
            raise ValidationError(ValidationCode.MISSING_DESTINATION)
        if not self.source:
            raise ValidationError(ValidationCode.MISSING_SOURCE)
        if not self.subject:
            raise ValidationError(ValidationCode.MISSING_SUBJECT)
        if not (self.text_body or self.html_body):
            raise ValidationError(ValidationCode.MISSING_BODY)

    def build_parameters(self) -> SerializedEnvelope:
        """
        Validate and serialize the envelope.

        Returns ``SendEmail`` parameters, or a single ``RawMessage.Data`` entry
        for ``SendRawEmail`` when the envelope has attachments.

        Raises:
            ValidationError: if the envelope is incomplete
            InvalidInput: if the envelope was already serialized, or its
                raw form cannot be encoded in the charset
        """
        if self._consumed:
            raise InvalidInput('envelope has already been serialized')
        self.validate()

        if self.attachments:
            serialized = SerializedEnvelope(SEND_RAW_EMAIL, {'RawMessage.Data': self.build_raw()})
        else:
            serialized = SerializedEnvelope(SEND_EMAIL, self._structured_parameters())
        self._consumed = True

        logger.debug(
            'envelope_serialized',
            action=serialized.action,
            recipients=len(self.to) + len(self.cc) + len(self.bcc),
            attachments=len(self.attachments),
        )
        return serialized

    def _structured_parameters(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        params.update(_indexed('Destination.ToAddresses', self.to))
        params.update(_indexed('Destination.CcAddresses', self.cc))
        params.update(_indexed('Destination.BccAddresses', self.bcc))
        params.update(_indexed('ReplyToAddresses', self.reply_to))

        params['Source'] = self.source
        if self.return_path:
            params['ReturnPath'] = self.return_path

        params['Message.Subject.Data'] = self.subject
        params['Message.Subject.Charset'] = self.charset
        if self.text_body:
            params['Message.Body.Text.Data'] = self.text_body
            params['Message.Body.Text.Charset'] = self.charset
        if self.html_body:
            params['Message.Body.Html.Data'] = self.html_body
            params['Message.Body.Html.Charset'] = self.charset
        return params

    def build_raw_message(self) -> str:
        """The MIME document as text, with a fresh boundary."""
        return build_raw_message(
            source=self.source,
            subject=self.subject,
            boundary=self._boundary_source(),
            to=self.to,
            cc=self.cc,
            bcc=self.bcc,
            reply_to=self.reply_to,
            text_body=self.text_body,
            html_body=self.html_body,
            charset=self.charset,
            attachments=self.attachments,
        )

    def build_raw(self) -> str:
        """
        Raises:
            InvalidInput: if a header or body cannot be encoded in the charset,
                or the source contains a line break
        """
        _check_header_value(self.source, 'source')
        try:
            return encode_raw_message(self.build_raw_message(), self.charset)
        except UnicodeEncodeError as e:
            raise InvalidInput(f'message cannot be encoded as {self.charset}: {e}') from e

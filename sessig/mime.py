"""
Raw MIME documents for the raw-send variant of the API.

The layout is fixed byte for byte: ``\\n`` line endings, a ``multipart/mixed``
outer part holding a ``multipart/alternative`` body part followed by one
base64 part per attachment. Two legacy quirks are part of the format: the
``Bcc:`` header is rendered from the cc list, and ``Content-ID`` is written
without a colon.
"""

import base64
import re
import secrets
from typing import Callable, Iterable, Optional, Protocol, Sequence, Union

BoundarySource = Callable[[], str]

LINE_LENGTH = 76

_DISPLAY_ADDRESS = re.compile(r'(.*)<(.*)>')


class AttachmentLike(Protocol):
    name: str
    mime_type: str
    data: bytes
    content_id: Optional[str]


def default_boundary() -> str:
    return secrets.token_hex(16)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def encode_header(value: Union[str, Iterable[str]], charset: str = 'UTF-8') -> str:
    """
    Encode the display names of one address or a list of addresses.

    ``Jöhn Doe <john@x.com>`` becomes ``=?UTF-8?B?SsO2aG4gRG9lIA==?= <john@x.com>``;
    the angle-bracket address is left as is and bare addresses pass through.
    """
    if not isinstance(value, str):
        return ', '.join(encode_header(item, charset) for item in value)
    match = _DISPLAY_ADDRESS.search(value)
    if match is None or not match.group(1):
        return value
    display_name, address = match.groups()
    return f'=?{charset}?B?{_b64(display_name.encode(charset))}?= <{address}>'


def encode_subject(subject: str, charset: str = 'UTF-8') -> str:
    return f'=?{charset}?B?{_b64(subject.encode(charset))}?='


def wrap_base64(data: bytes, line_length: int = LINE_LENGTH) -> str:
    """Base64 ``data`` with every line, the last one included, ending in ``\\n``."""
    encoded = _b64(data)
    # an empty payload still yields a single empty line
    return ''.join(
        encoded[start:start + line_length] + '\n'
        for start in range(0, max(len(encoded), 1), line_length)
    )


def build_raw_message(
        *,
        source: str,
        subject: str,
        boundary: str,
        to: Sequence[str] = (),
        cc: Sequence[str] = (),
        bcc: Sequence[str] = (),
        reply_to: Sequence[str] = (),
        text_body: str = '',
        html_body: str = '',
        charset: str = 'UTF-8',
        attachments: Sequence[AttachmentLike] = ()
) -> str:
    lines = [f'From: {encode_header(source, charset)}\n']
    if to:
        lines.append(f'To: {encode_header(to, charset)}\n')
    if cc:
        lines.append(f'cc: {encode_header(cc, charset)}\n')
    if bcc:
        lines.append(f'Bcc: {encode_header(cc, charset)}\n')
    if reply_to:
        lines.append(f'Reply-To: {encode_header(reply_to, charset)}\n')

    lines.append(f'Subject: {encode_subject(subject, charset)}\n')
    lines.append('MIME-Version: 1.0\n')
    lines.append(f'Content-Type: multipart/mixed; boundary="{boundary}"\n')
    lines.append(f'\n--{boundary}\n')
    lines.append(f'Content-Type: multipart/alternative; boundary="alt-{boundary}"\n')

    if text_body:
        lines.append(f'\n--alt-{boundary}\n')
        lines.append(f'Content-Type: text/plain; charset="{charset}"\n\n')
        lines.append(f'{text_body}\n')
    if html_body:
        lines.append(f'\n--alt-{boundary}\n')
        lines.append(f'Content-Type: text/html; charset="{charset}"\n\n')
        lines.append(f'{html_body}\n')
    lines.append(f'\n--alt-{boundary}--\n')

    for attachment in attachments:
        lines.append(f'\n--{boundary}\n')
        lines.append(f'Content-Type: {attachment.mime_type}; name="{attachment.name}"\n')
        if attachment.content_id:
            lines.append(f'Content-ID{attachment.content_id}\n')
        lines.append('Content-Transfer-Encoding: base64\n')
        lines.append(f'\n{wrap_base64(attachment.data)}\n')

    lines.append(f'\n--{boundary}--\n')
    return ''.join(lines)


def encode_raw_message(message: str, charset: str = 'UTF-8') -> str:
    """The transport payload for ``RawMessage.Data``."""
    return _b64(message.encode(charset))

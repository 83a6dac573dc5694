import unittest

from sessig.envelope import Envelope
from sessig.errors import FormatError, ValidationError
from sessig.identity import (
    delete_identity,
    get_identity_verification_attributes,
    get_send_quota,
    get_send_statistics,
    is_domain,
    is_email,
    list_identities,
    send_email,
    verify_email_identity,
)


class TestIdentityChecks(unittest.TestCase):
    def test_is_email(self) -> None:
        self.assertTrue(is_email('user@example.com'))
        self.assertFalse(is_email('user@'))
        self.assertFalse(is_email('example.com'))

    def test_is_domain(self) -> None:
        self.assertTrue(is_domain('example.com'))
        self.assertTrue(is_domain('mail.my-site.co.uk'))
        self.assertFalse(is_domain('Example.COM'))
        self.assertFalse(is_domain('-bad.com'))
        self.assertFalse(is_domain('localhost'))


class TestBuilders(unittest.TestCase):
    def test_list_identities(self) -> None:
        request = list_identities()

        self.assertEqual((request.action, request.method), ('ListIdentities', 'GET'))
        self.assertEqual(dict(request.parameters), {})

    def test_list_identities_by_type(self) -> None:
        self.assertEqual(dict(list_identities('Domain').parameters), {'IdentityType': 'Domain'})

    def test_list_identities_bad_type(self) -> None:
        with self.assertRaises(FormatError):
            list_identities('Phone')

    def test_verify_email_identity(self) -> None:
        request = verify_email_identity('user@example.com')

        self.assertEqual(request.action, 'VerifyEmailIdentity')
        self.assertEqual(dict(request.parameters), {'EmailAddress': 'user@example.com'})

    def test_verify_email_identity_rejects_domain(self) -> None:
        with self.assertRaises(FormatError):
            verify_email_identity('example.com')

    def test_delete_identity(self) -> None:
        self.assertEqual(dict(delete_identity('example.com').parameters), {'Identity': 'example.com'})
        self.assertEqual(dict(delete_identity('a@example.com').parameters), {'Identity': 'a@example.com'})

    def test_delete_identity_rejects_garbage(self) -> None:
        with self.assertRaises(FormatError):
            delete_identity('not an identity')

    def test_get_identity_verification_attributes(self) -> None:
        request = get_identity_verification_attributes(['a@example.com', 'example.org'])

        self.assertEqual(dict(request.parameters), {
            'Identities.member.1': 'a@example.com',
            'Identities.member.2': 'example.org',
        })

    def test_get_identity_verification_attributes_rejects_garbage(self) -> None:
        with self.assertRaises(FormatError):
            get_identity_verification_attributes(['a@example.com', '???'])

    def test_account_queries(self) -> None:
        self.assertEqual(get_send_quota().action, 'GetSendQuota')
        self.assertEqual(get_send_statistics().action, 'GetSendStatistics')

    def test_send_email(self) -> None:
        envelope = Envelope('sender@example.com', 'Subject', 'Body')
        envelope.add_to('to@example.com')
        request = send_email(envelope)

        self.assertEqual((request.action, request.method), ('SendEmail', 'POST'))
        self.assertEqual(request.parameters['Source'], 'sender@example.com')

    def test_send_raw_email(self) -> None:
        envelope = Envelope('sender@example.com', 'Subject', 'Body')
        envelope.add_to('to@example.com')
        envelope.add_attachment('a.bin', b'x')
        request = send_email(envelope)

        self.assertEqual(request.action, 'SendRawEmail')
        self.assertEqual(list(request.parameters), ['RawMessage.Data'])

    def test_send_email_validates(self) -> None:
        with self.assertRaises(ValidationError):
            send_email(Envelope('sender@example.com', 'Subject', 'Body'))


if __name__ == '__main__':
    unittest.main(verbosity=2)

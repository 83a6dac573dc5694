import unittest

from sessig.errors import (
    FormatError,
    InvalidInput,
    ServiceError,
    SesError,
    ValidationCode,
    ValidationError,
)


class TestErrors(unittest.TestCase):
    def test_hierarchy(self) -> None:
        for error in (InvalidInput, FormatError, ValidationError, ServiceError):
            self.assertTrue(issubclass(error, SesError))
        self.assertTrue(issubclass(InvalidInput, ValueError))
        self.assertTrue(issubclass(FormatError, ValueError))
        self.assertFalse(issubclass(ValidationError, ValueError))

    def test_validation_error_from_string_code(self) -> None:
        error = ValidationError('MissingDestination')

        self.assertIs(error.code, ValidationCode.MISSING_DESTINATION)
        self.assertIn('To: or CC:, Bcc:', error.description)

    def test_validation_error_unknown_code(self) -> None:
        with self.assertRaises(ValueError):
            ValidationError('Nope')

    def test_known_service_error(self) -> None:
        error = ServiceError('Throttling')

        self.assertTrue(error.is_known)
        self.assertEqual(str(error), 'Throttling: The request was denied due to request throttling.')

    def test_unknown_service_error(self) -> None:
        error = ServiceError('SomethingNew')

        self.assertFalse(error.is_known)
        self.assertEqual(error.description, '')
        self.assertEqual(str(error), 'SomethingNew')

    def test_service_error_with_message(self) -> None:
        error = ServiceError('MessageRejected', 'Email address is not verified.')

        self.assertEqual(str(error), 'Email address is not verified.')
        self.assertTrue(error.description.startswith('Indicates that the action failed'))


if __name__ == '__main__':
    unittest.main(verbosity=2)

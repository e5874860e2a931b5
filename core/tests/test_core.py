from decimal import Decimal
from http import HTTPStatus

from django.db import IntegrityError
from django.test import SimpleTestCase
from rest_framework.exceptions import ValidationError

from core.exception_handler import custom_exception_handler
from core.util import round_half_up
from points.exceptions import ConfigurationError


class RoundHalfUpTests(SimpleTestCase):

    def test_rounds_half_up(self):
        self.assertEqual(round_half_up(Decimal("62.125")), Decimal("62.13"))
        self.assertEqual(round_half_up(Decimal("62.124")), Decimal("62.12"))
        self.assertEqual(round_half_up(40.625, 1), Decimal("40.6"))

    def test_none_passes_through(self):
        self.assertIsNone(round_half_up(None))


class ExceptionHandlerTests(SimpleTestCase):

    def test_configuration_error_is_conflict(self):
        response = custom_exception_handler(ConfigurationError("Unknown tournament category 'pairs'"), {})

        self.assertEqual(response.status_code, HTTPStatus.CONFLICT)
        self.assertEqual(response.data["detail"], "Unknown tournament category 'pairs'")

    def test_integrity_error_is_conflict(self):
        response = custom_exception_handler(IntegrityError("duplicate"), {})

        self.assertEqual(response.status_code, HTTPStatus.CONFLICT)

    def test_api_exceptions_keep_their_status(self):
        response = custom_exception_handler(ValidationError("bad"), {})

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)

    def test_other_errors_are_server_errors(self):
        response = custom_exception_handler(RuntimeError("boom"), {})

        self.assertEqual(response.status_code, HTTPStatus.INTERNAL_SERVER_ERROR)

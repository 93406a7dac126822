import os
import sys
from unittest import TestCase, skipUnless
from unittest.mock import patch

from pydantic import ValidationError

from cexio.connector.cexio_utils import (
    CexioConfigMap,
    format_decimal,
    is_success_status,
    parse_numeric_string,
    parse_numeric_strings,
)
from cexio.core.utils.async_retry import RetryPolicy


class FormatDecimalTests(TestCase):

    def test_numbers_are_padded_to_eight_decimals(self):
        self.assertEqual("1.00000000", format_decimal(1))
        self.assertEqual("2.50000000", format_decimal(2.5))
        self.assertEqual("650.32320000", format_decimal(650.3232))
        self.assertEqual("0.00000001", format_decimal("0.00000001"))

    def test_extra_decimals_are_rounded(self):
        self.assertEqual("0.12345679", format_decimal(0.123456789))
        self.assertEqual("1.00000000", format_decimal("0.999999999"))
        self.assertEqual("12.35", format_decimal("12.345", max_decimal_places=2))

    def test_never_more_decimals_than_requested(self):
        for value in (1e-12, 3.14159265358979, "100", 123456789.123456789, -0.5):
            formatted = format_decimal(value, 8)
            self.assertEqual(8, len(formatted.split(".")[1]), formatted)

    def test_large_values_keep_their_integer_digits(self):
        self.assertEqual("123456789012345678901234567890.00000000", format_decimal("123456789012345678901234567890"))

    def test_non_numeric_values_pass_through(self):
        self.assertEqual("not-a-number", format_decimal("not-a-number"))
        self.assertEqual("", format_decimal(""))
        self.assertIsNone(format_decimal(None))
        self.assertEqual("NaN", format_decimal("NaN"))
        self.assertEqual(float("inf"), format_decimal(float("inf")))

    def test_booleans_are_rejected(self):
        with self.assertRaises(TypeError):
            format_decimal(True)
        with self.assertRaises(TypeError):
            format_decimal(False)


class ParseNumericStringsTests(TestCase):

    def test_numeric_strings(self):
        self.assertEqual(400, parse_numeric_string("400.00"))
        self.assertIsInstance(parse_numeric_string("400.00"), float)
        self.assertEqual(1411985700, parse_numeric_string("1411985700"))
        self.assertIsInstance(parse_numeric_string("1411985700"), int)
        self.assertEqual(-12.48, parse_numeric_string("-12.48"))
        self.assertEqual(0.5, parse_numeric_string(".5"))
        self.assertEqual(1e-8, parse_numeric_string("1e-8"))
        self.assertEqual(7, parse_numeric_string(" 7 "))

    def test_non_numeric_strings_are_kept(self):
        for value in ("BTC", "BTC:USD", "ud100036721", "", "12abc", "nan", "Infinity", "1.2.3", "-"):
            self.assertEqual(value, parse_numeric_string(value))

    @skipUnless(hasattr(sys, "get_int_max_str_digits"), "no integer string conversion limit")
    def test_digit_strings_too_long_to_convert_are_kept(self):
        long_digits = "1" * (sys.get_int_max_str_digits() + 700)

        self.assertEqual({"x": long_digits}, parse_numeric_strings({"x": long_digits}))

    def test_nested_payload_keeps_its_shape(self):
        payload = {
            "pair": {"symbol1": "BTC", "symbol2": "USD"},
            "bids": [[250.00, "0.02000000"], ["280.00", 20.51246433]],
            "id": "104102",
            "a:BTC:c": "1.00000000",
            "otime": 1475602208467,
            "anySlippage": True,
            "error": None,
        }

        result = parse_numeric_strings(payload)

        self.assertEqual({
            "pair": {"symbol1": "BTC", "symbol2": "USD"},
            "bids": [[250.0, 0.02], [280.0, 20.51246433]],
            "id": 104102,
            "a:BTC:c": 1.0,
            "otime": 1475602208467,
            "anySlippage": True,
            "error": None,
        }, result)
        self.assertEqual(list(payload.keys()), list(result.keys()))

    def test_scalars(self):
        self.assertEqual(400, parse_numeric_strings("400.00"))
        self.assertEqual("BTC", parse_numeric_strings("BTC"))
        self.assertIsNone(parse_numeric_strings(None))
        self.assertIs(False, parse_numeric_strings(False))
        self.assertEqual([], parse_numeric_strings([]))


class IsSuccessStatusTests(TestCase):

    def test_status(self):
        self.assertTrue(is_success_status({"ok": "ok", "data": []}))
        self.assertTrue(is_success_status({"bid": "1"}))
        self.assertFalse(is_success_status({"ok": "error"}))
        self.assertFalse(is_success_status({"error": "Invalid Nonce"}))


class CexioConfigMapTests(TestCase):

    def setUp(self) -> None:
        super().setUp()
        env_patcher = patch.dict(os.environ, {
            "CEXIO_CLIENT_ID": "env-client",
            "CEXIO_KEY": "env-key",
            "CEXIO_SECRET": "env-secret",
            "CEXIO_CCY_1": "ETH",
            "CEXIO_CCY_2": "USD",
        }, clear=True)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

    def test_missing_fields_come_from_environment(self):
        config = CexioConfigMap()

        self.assertEqual("env-client", config.client_id)
        self.assertEqual("env-key", config.secret_value("api_key"))
        self.assertEqual("env-secret", config.secret_value("api_secret"))
        self.assertEqual("ETH", config.ccy1)
        self.assertEqual("USD", config.ccy2)
        self.assertEqual(RetryPolicy(), config.retry_policy)

    def test_explicit_fields_take_precedence(self):
        config = CexioConfigMap(client_id="clientId", api_key="key", ccy1="BTC", retry_policy={"retries": 1})

        self.assertEqual("clientId", config.client_id)
        self.assertEqual("key", config.secret_value("api_key"))
        self.assertEqual("env-secret", config.secret_value("api_secret"))
        self.assertEqual("BTC", config.ccy1)
        self.assertEqual("USD", config.ccy2)
        self.assertEqual(1, config.retry_policy.retries)

    def test_secrets_are_masked(self):
        config = CexioConfigMap(api_secret="intergalactic space badgers")

        self.assertNotIn("badgers", repr(config))

    def test_config_is_immutable(self):
        config = CexioConfigMap()

        with self.assertRaises(ValidationError):
            config.ccy1 = "LTC"

    def test_unknown_fields_are_rejected(self):
        with self.assertRaises(ValidationError):
            CexioConfigMap(passphrase="nope")

    @patch.dict(os.environ, {}, clear=True)
    def test_unset_environment_leaves_fields_empty(self):
        config = CexioConfigMap()

        self.assertIsNone(config.client_id)
        self.assertIsNone(config.secret_value("api_key"))
        self.assertIsNone(config.ccy1)

import unittest
from unittest.mock import MagicMock

import requests

from helpers import fake_response
from ovh_time import TIME_PATH, compute_drift, corrected_timestamp

TIME_URL = "https://api.example/1.0" + TIME_PATH


class TestComputeDrift(unittest.TestCase):
    def test_drift_is_local_minus_server(self):
        transport = MagicMock(return_value=fake_response(b"1000"))
        drift = compute_drift(TIME_URL, transport=transport, clock=lambda: 1050)
        self.assertEqual(drift, 50)
        transport.assert_called_once_with("GET", TIME_URL, timeout=None)

    def test_negative_drift(self):
        transport = MagicMock(return_value=fake_response(b"1100"))
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1050), -50)

    def test_whitespace_around_body(self):
        transport = MagicMock(return_value=fake_response(b"1000\n"))
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1000.7), 0)

    def test_timeout_forwarded(self):
        transport = MagicMock(return_value=fake_response(b"1000"))
        compute_drift(TIME_URL, transport=transport, clock=lambda: 1000, timeout=3)
        transport.assert_called_once_with("GET", TIME_URL, timeout=3)

    def test_unreachable_defaults_to_zero(self):
        transport = MagicMock(side_effect=requests.ConnectionError("connection refused"))
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1050), 0)

    def test_plain_os_error_defaults_to_zero(self):
        transport = MagicMock(side_effect=ConnectionRefusedError())
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1050), 0)

    def test_non_numeric_body_defaults_to_zero(self):
        transport = MagicMock(return_value=fake_response(b"<html>maintenance</html>"))
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1050), 0)

    def test_http_error_defaults_to_zero(self):
        transport = MagicMock(return_value=fake_response(b"1000", status_code=503))
        self.assertEqual(compute_drift(TIME_URL, transport=transport, clock=lambda: 1050), 0)


class TestCorrectedTimestamp(unittest.TestCase):
    def test_subtracts_drift(self):
        self.assertEqual(corrected_timestamp(50, clock=lambda: 2000), 1950)

    def test_zero_drift_uses_local_clock(self):
        self.assertEqual(corrected_timestamp(0, clock=lambda: 2000.9), 2000)


if __name__ == '__main__':
    unittest.main()

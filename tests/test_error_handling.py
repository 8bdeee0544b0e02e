"""
Unit tests for lookup error translation, the failure response and JSON logging.
"""
import json
import logging
import unittest

import httpx

from collabgate.core.error_handling import (
    NotOnRoute,
    PlanningUnavailable,
    RegistryUnavailable,
    expectation_failed_response,
    request_id_var,
    translate_lookup_errors,
)
from collabgate.core.logging import JSONFormatter, RequestIDFilter, RoutingTextFormatter


class TestTranslateLookupErrors(unittest.IsolatedAsyncioTestCase):
    """Test cases for translate_lookup_errors."""

    async def test_success_passes_result_through(self):
        @translate_lookup_errors(RegistryUnavailable, "Test lookup")
        async def lookup():
            return "ok"

        self.assertEqual(await lookup(), "ok")

    async def test_http_error_translated(self):
        @translate_lookup_errors(RegistryUnavailable, "Test lookup")
        async def lookup():
            raise httpx.ConnectError("refused")

        with self.assertRaises(RegistryUnavailable) as ctx:
            await lookup()
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)

    async def test_decode_error_translated(self):
        @translate_lookup_errors(PlanningUnavailable, "Test lookup")
        async def lookup():
            return json.loads("not json")

        with self.assertRaises(PlanningUnavailable):
            await lookup()

    async def test_collaboration_errors_not_rewrapped(self):
        @translate_lookup_errors(RegistryUnavailable, "Test lookup")
        async def lookup():
            raise NotOnRoute("X", "A,B")

        with self.assertRaises(NotOnRoute):
            await lookup()

    def test_sync_function_rejected(self):
        with self.assertRaises(TypeError):
            @translate_lookup_errors(RegistryUnavailable)
            def lookup():
                return None


class TestExpectationFailedResponse(unittest.TestCase):

    def test_response_shape(self):
        response = expectation_failed_response()
        self.assertEqual(response.status_code, 417)
        self.assertEqual(response.body, b"417 Expectation Failed\n")
        self.assertEqual(response.headers["content-type"], "text/plain")


class TestJSONLogging(unittest.TestCase):

    def test_json_record_includes_request_id_and_extra_fields(self):
        token = request_id_var.set("req-42")
        try:
            record = logging.LogRecord("collabgate", logging.INFO, __file__, 1, "Routing as %s", ("relay",), None)
            record.extra_fields = {"role": "relay", "route": "A,B,C"}
            RequestIDFilter().filter(record)
            payload = json.loads(JSONFormatter().format(record))
        finally:
            request_id_var.reset(token)

        self.assertEqual(payload["message"], "Routing as relay")
        self.assertEqual(payload["request_id"], "req-42")
        self.assertEqual(payload["route"], "A,B,C")
        self.assertEqual(payload["level"], "INFO")

    def test_text_record_appends_routing_columns(self):
        formatter = RoutingTextFormatter("%(levelname)s - %(message)s")
        record = logging.LogRecord("collabgate", logging.INFO, __file__, 1, "Routing as %s", ("relay",), None)
        record.extra_fields = {"role": "relay", "route": "A,B,C", "next_center": "C"}

        self.assertEqual(
            formatter.format(record),
            "INFO - Routing as relay | role=relay route=A,B,C next_center=C",
        )

    def test_text_record_without_routing_context(self):
        formatter = RoutingTextFormatter("%(levelname)s - %(message)s")
        record = logging.LogRecord("collabgate", logging.INFO, __file__, 1, "Gateway configured", (), None)

        self.assertEqual(formatter.format(record), "INFO - Gateway configured")

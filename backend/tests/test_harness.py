"""
Pipeline Demo — Test Harness Tests
===================================

What:  Tests for the harness that gates the pipeline.
How:   Steps run against the app in-process (ASGITransport); the runner is
       exercised end-to-end on a real loopback port.

What we test:
    ✅ check() passes silently-but-logged and fails fast with the message
    ✅ make_request decodes JSON, falls back to text, propagates transport errors
    ✅ The passing contract holds against the service
    ✅ Every failure scenario fails against the service
    ✅ HarnessConfig suite validation and port defaults
    ✅ run_suite exit codes, and the test port is released afterwards
"""

import logging
import socket

import httpx
import pytest
from httpx import ASGITransport

from pipeline_demo.exceptions import HarnessAssertionError
from pipeline_demo.harness.client import HarnessClient, HarnessResponse
from pipeline_demo.harness.config import FAILING_PORT, PASSING_PORT, HarnessConfig
from pipeline_demo.harness.runner import EXIT_FAILED, EXIT_PASSED, run_suite
from pipeline_demo.harness.suites import (
    FAILURE_SCENARIOS,
    PASSING_SUITE,
    check,
    get_suite,
)


def asgi_client(app) -> HarnessClient:
    return HarnessClient("http://test", transport=ASGITransport(app=app))


class TestCheck:

    def test_true_condition_logs_message(self, caplog):
        with caplog.at_level(logging.INFO, logger="pipeline_demo.harness"):
            check(True, "Root endpoint returns 200 status")

        assert "Root endpoint returns 200 status" in caplog.text

    def test_false_condition_raises(self):
        with pytest.raises(HarnessAssertionError) as exc_info:
            check(None, "Users endpoint returns success")

        assert str(exc_info.value) == "Test failed: Users endpoint returns success"
        assert exc_info.value.check == "Users endpoint returns success"


class TestHarnessClient:

    @pytest.mark.asyncio
    async def test_decodes_json_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))
        async with HarnessClient("http://test", transport=transport) as client:
            response = await client.make_request("/")

        assert response == HarnessResponse(status=200, body={"ok": True})
        assert response.get("ok") is True

    @pytest.mark.asyncio
    async def test_falls_back_to_text(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
        async with HarnessClient("http://test", transport=transport) as client:
            response = await client.make_request("/")

        assert response.status == 502
        assert response.body == "Bad Gateway"
        assert response.get("error") is None

    @pytest.mark.asyncio
    async def test_sends_json_body_with_content_type(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["content_type"] = request.headers["Content-Type"]
            seen["body"] = request.content
            return httpx.Response(201, json={})

        async with HarnessClient("http://test", transport=httpx.MockTransport(handler)) as client:
            await client.make_request("/api/users", "POST", {"name": "A"})

        assert seen == {
            "method": "POST",
            "content_type": "application/json",
            "body": b'{"name": "A"}',
        }

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HarnessClient("http://test", transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.make_request("/")


class TestSuitesAgainstService:

    @pytest.mark.asyncio
    async def test_passing_suite_holds(self, test_app):
        async with asgi_client(test_app) as client:
            for _, step in PASSING_SUITE.steps:
                await step(client)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", sorted(FAILURE_SCENARIOS))
    async def test_failure_scenario_fails(self, test_app, name):
        suite = get_suite(name)
        assert suite.expect_failure

        async with asgi_client(test_app) as client:
            with pytest.raises(HarnessAssertionError):
                for _, step in suite.steps:
                    await step(client)

    @pytest.mark.asyncio
    async def test_network_scenario_reports_simulated_failure(self, test_app):
        (_, step), = get_suite("network").steps

        async with asgi_client(test_app) as client:
            with pytest.raises(HarnessAssertionError, match="Network connection failed"):
                await step(client)

    def test_failing_alias_resolves_to_default_scenario(self):
        suite = get_suite("failing")

        assert suite.name == "api-contract"
        assert suite.expect_failure

    def test_unknown_suite(self):
        with pytest.raises(ValueError, match="Unknown suite"):
            get_suite("flaky")


class TestHarnessConfig:

    def test_passing_defaults(self):
        config = HarnessConfig()

        assert config.suite == "passing"
        assert config.port == PASSING_PORT
        assert config.base_url == f"http://127.0.0.1:{PASSING_PORT}"

    def test_failure_scenario_uses_failing_port(self):
        assert HarnessConfig(suite="security").port == FAILING_PORT

    def test_failing_alias_is_stored_as_scenario_name(self):
        config = HarnessConfig(suite="failing")

        assert config.suite == "api-contract"
        assert config.port == FAILING_PORT

    def test_explicit_port_wins(self):
        assert HarnessConfig(suite="security", port=4000).port == 4000

    def test_rejects_unknown_suite(self):
        with pytest.raises(ValueError):
            HarnessConfig(suite="flaky")


class TestRunSuite:

    @staticmethod
    def _port_is_free(port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            try:
                sock.bind(("127.0.0.1", port))
            except OSError:
                return False
            return True

    @pytest.mark.asyncio
    async def test_passing_suite_exits_zero(self, test_app, free_port):
        config = HarnessConfig(suite="passing", port=free_port)

        assert await run_suite(config, app=test_app) == EXIT_PASSED
        assert self._port_is_free(free_port)

    @pytest.mark.asyncio
    async def test_failure_scenario_exits_one(self, test_app, free_port):
        config = HarnessConfig(suite="api-contract", port=free_port)

        assert await run_suite(config, app=test_app) == EXIT_FAILED
        assert self._port_is_free(free_port)

"""
Pipeline Demo — Harness Suites
===============================

What:  The contract variants the harness can assert against the service.
How:   A Suite is a fixed, ordered list of steps. Each step hits one endpoint
       and makes 2-4 related checks; the first failing check aborts the run.

Suites:
    passing          The real contract. Every check holds; the run exits 0.
    api-contract     Expects version 2.0.0 and a welcomeMessage field.
    status-code      Expects GET /health to answer 201.
    data-validation  Expects 5 users and a `users` property.
    network          Turns a failed expectation into a simulated network error.
    business-logic   Expects a `user` property and 200 on creation.
    security         Expects script tags to be stripped from names. The service
                     does not sanitize input; this is a known, documented gap.

Every suite except `passing` is expected to fail against the service, to show
how a red test stage stops a pipeline before deployment.
`failing` is an alias for `api-contract`, the default failure scenario.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Tuple

import httpx

from pipeline_demo.exceptions import HarnessAssertionError
from pipeline_demo.harness.client import HarnessClient

logger = logging.getLogger("pipeline_demo.harness")

Step = Callable[[HarnessClient], Awaitable[None]]

EXPECTED_VERSION = "1.0.0"
SAMPLE_USER = {"name": "Test User", "email": "test@example.com"}


def check(condition: object, message: str) -> None:
    """
    Fail fast when `condition` is falsy; otherwise log the passed check.

    Raises:
        HarnessAssertionError: carrying "Test failed: <message>"
    """
    if not condition:
        raise HarnessAssertionError(message)
    logger.info("✓ %s", message)


# ══════════════════════════════════════════════════════════════════════════
# Passing Contract
# ══════════════════════════════════════════════════════════════════════════

async def verify_root_endpoint(client: HarnessClient) -> None:
    response = await client.make_request("/")

    check(response.status == 200, "Root endpoint returns 200 status")
    check(response.get("message"), "Root endpoint returns welcome message")
    check(response.get("version") == EXPECTED_VERSION, "Root endpoint returns correct version")


async def verify_health_endpoint(client: HarnessClient) -> None:
    response = await client.make_request("/health")
    uptime = response.get("uptime")

    check(response.status == 200, "Health endpoint returns 200 status")
    check(response.get("status") == "healthy", "Health endpoint returns healthy status")
    check(
        isinstance(uptime, (int, float)) and not isinstance(uptime, bool) and uptime >= 0,
        "Health endpoint returns uptime",
    )


async def verify_users_endpoint(client: HarnessClient) -> None:
    response = await client.make_request("/api/users")
    data = response.get("data")

    check(response.status == 200, "Users endpoint returns 200 status")
    check(response.get("success") is True, "Users endpoint returns success")
    check(isinstance(data, list), "Users endpoint returns array of users")
    check(len(data) == 2, "Users endpoint returns correct number of users")


async def verify_create_user_endpoint(client: HarnessClient) -> None:
    response = await client.make_request("/api/users", "POST", SAMPLE_USER)
    data = response.get("data") or {}

    check(response.status == 201, "Create user endpoint returns 201 status")
    check(response.get("success") is True, "Create user endpoint returns success")
    check(data.get("name") == SAMPLE_USER["name"], "Create user endpoint returns correct name")
    check(data.get("email") == SAMPLE_USER["email"], "Create user endpoint returns correct email")


async def verify_not_found_endpoint(client: HarnessClient) -> None:
    response = await client.make_request("/nonexistent")

    check(response.status == 404, "404 endpoint returns 404 status")
    check(response.get("success") is False, "404 endpoint returns failure")
    check(response.get("error") == "Route not found", "404 endpoint returns correct error message")


async def verify_invalid_user_creation(client: HarnessClient) -> None:
    response = await client.make_request("/api/users", "POST", {"name": "Test User"})

    check(response.status == 400, "Invalid user creation returns 400 status")
    check(response.get("success") is False, "Invalid user creation returns failure")
    check(
        response.get("error") == "Name and email are required",
        "Invalid user creation returns correct error",
    )


# ══════════════════════════════════════════════════════════════════════════
# Failure Scenarios (each is expected to fail)
# ══════════════════════════════════════════════════════════════════════════

async def expect_api_contract_change(client: HarnessClient) -> None:
    response = await client.make_request("/")

    check(response.get("version") == "2.0.0", "FAIL: Root endpoint returns version 2.0.0 (expected failure)")
    check(response.get("welcomeMessage"), "FAIL: Root endpoint returns welcomeMessage property (expected failure)")


async def expect_wrong_status_code(client: HarnessClient) -> None:
    response = await client.make_request("/health")

    check(response.status == 201, "FAIL: Health endpoint returns 201 status (expected failure)")


async def expect_wrong_data_shape(client: HarnessClient) -> None:
    response = await client.make_request("/api/users")

    check(len(response.get("data") or []) == 5, "FAIL: Users endpoint returns 5 users (expected failure)")
    check(response.get("users"), "FAIL: Response has users property instead of data (expected failure)")


async def expect_network_failure(client: HarnessClient) -> None:
    try:
        response = await client.make_request("/this-endpoint-does-not-exist")
        check(response.status == 200, "FAIL: Non-existent endpoint returns 200 (expected failure)")
    except (httpx.TransportError, HarnessAssertionError) as exc:
        raise HarnessAssertionError("FAIL: Network connection failed (simulated failure)") from exc


async def expect_business_logic_change(client: HarnessClient) -> None:
    response = await client.make_request("/api/users", "POST", SAMPLE_USER)

    check(response.get("user"), "FAIL: Create user returns user property instead of data (expected failure)")
    check(response.status == 200, "FAIL: User creation returns 200 instead of 201 (expected failure)")


async def expect_input_sanitization(client: HarnessClient) -> None:
    malicious = {"name": '<script>alert("xss")</script>', "email": "test@example.com"}
    response = await client.make_request("/api/users", "POST", malicious)
    name = (response.get("data") or {}).get("name", "")

    check("<script>" not in name, "FAIL: XSS vulnerability detected (expected failure)")


# ══════════════════════════════════════════════════════════════════════════
# Registry
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Suite:
    name: str
    description: str
    steps: Tuple[Tuple[str, Step], ...]
    expect_failure: bool = False


PASSING_SUITE = Suite(
    name="passing",
    description="The service's real contract; every check passes",
    steps=(
        ("root endpoint", verify_root_endpoint),
        ("health endpoint", verify_health_endpoint),
        ("users API endpoint", verify_users_endpoint),
        ("create user endpoint", verify_create_user_endpoint),
        ("404 endpoint", verify_not_found_endpoint),
        ("invalid user creation", verify_invalid_user_creation),
    ),
)

FAILURE_SCENARIOS: Dict[str, Suite] = {
    suite.name: suite
    for suite in (
        Suite("api-contract", "API breaking changes", (("API contract failures", expect_api_contract_change),), True),
        Suite("status-code", "Wrong status codes", (("status code failures", expect_wrong_status_code),), True),
        Suite("data-validation", "Wrong data structure", (("data validation failures", expect_wrong_data_shape),), True),
        Suite("network", "Network issues", (("network failures", expect_network_failure),), True),
        Suite("business-logic", "Business logic errors", (("business logic failures", expect_business_logic_change),), True),
        Suite("security", "Unsanitized input", (("security failures", expect_input_sanitization),), True),
    )
}

# `--suite failing` runs this scenario, the one the failing pipeline demonstrates
FAILING_ALIAS = "failing"
DEFAULT_FAILURE_SCENARIO = "api-contract"

SUITES: Dict[str, Suite] = {PASSING_SUITE.name: PASSING_SUITE, **FAILURE_SCENARIOS}


def resolve_suite_name(name: str) -> str:
    """Map the `failing` alias to the default failure scenario; validate the rest."""
    if name == FAILING_ALIAS:
        return DEFAULT_FAILURE_SCENARIO
    if name not in SUITES:
        raise ValueError(
            f"Unknown suite '{name}'. Must be one of: {FAILING_ALIAS}, {', '.join(SUITES)}"
        )
    return name


def get_suite(name: str) -> Suite:
    return SUITES[resolve_suite_name(name)]

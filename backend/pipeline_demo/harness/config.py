"""
Pipeline Demo — Harness Configuration
======================================

What:  Which contract variant to assert, and where and how to run the service.
Why:   One runner serves both the passing gate and the failure demonstrations;
       the variant is a value picked on the command line, not a code edit.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pipeline_demo.harness.suites import PASSING_SUITE, resolve_suite_name

# Separate ports so a passing and a failing run can share a CI host
PASSING_PORT = 3001
FAILING_PORT = 3002


class HarnessConfig(BaseModel):
    """
    Attributes:
        suite: "passing", one failure scenario name, or "failing" (stored as
            the default failure scenario it stands for)
        host: Loopback address the service binds to and the client targets
        port: Test port; defaults to 3001 for "passing" and 3002 otherwise
        startup_grace: Fixed wait after launching the server, in seconds
        startup_timeout: Upper bound on waiting for the server to report ready
        request_timeout: Per-request timeout, in seconds
    """
    suite: str = Field(default=PASSING_SUITE.name)
    host: str = Field(default="127.0.0.1")
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    startup_grace: float = Field(default=0.1, ge=0)
    startup_timeout: float = Field(default=5.0, gt=0)
    request_timeout: float = Field(default=5.0, gt=0)

    @field_validator("suite")
    @classmethod
    def validate_suite(cls, v: str) -> str:
        return resolve_suite_name(v)

    @model_validator(mode="after")
    def default_port(self) -> "HarnessConfig":
        if self.port is None:
            self.port = PASSING_PORT if self.suite == PASSING_SUITE.name else FAILING_PORT
        return self

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

"""
Pipeline Demo — Harness Runner
===============================

What:  Boots the service on the test port, runs one suite, reports an exit code.
How:   uvicorn.Server runs as a task on the harness's own event loop; the
       suite's steps then run one after another over loopback HTTP.

Lifecycle:
    1. Start the server task on config.port
    2. Wait the fixed grace period, then until uvicorn reports started
    3. Run every step of the suite in order
    4. Return 0 if all steps completed, 1 on the first raised error
    5. ALWAYS stop the server and wait for the socket to be released

The exit code is the only thing the CI pipeline reads.
"""

import asyncio
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from pipeline_demo.harness.client import HarnessClient
from pipeline_demo.harness.config import HarnessConfig
from pipeline_demo.harness.suites import get_suite

logger = logging.getLogger("pipeline_demo.harness")

EXIT_PASSED = 0
EXIT_FAILED = 1


async def _wait_until_started(
    server: uvicorn.Server,
    serve_task: "asyncio.Task[None]",
    config: HarnessConfig,
) -> None:
    await asyncio.sleep(config.startup_grace)

    loop = asyncio.get_running_loop()
    deadline = loop.time() + config.startup_timeout
    while not server.started:
        if serve_task.done():
            raise RuntimeError(f"Test server on port {config.port} exited during startup")
        if loop.time() > deadline:
            raise TimeoutError(
                f"Test server on port {config.port} not ready after {config.startup_timeout}s"
            )
        await asyncio.sleep(0.01)


async def run_suite(config: HarnessConfig, app: Optional[FastAPI] = None) -> int:
    """
    Run the configured suite against a freshly started service.

    Args:
        config: Suite selection and server/client parameters
        app: Application to serve; a new one (with a fresh store) by default

    Returns:
        EXIT_PASSED (0) or EXIT_FAILED (1)
    """
    if app is None:
        from pipeline_demo.main import create_app
        app = create_app()

    suite = get_suite(config.suite)
    server = uvicorn.Server(
        uvicorn.Config(app, host=config.host, port=config.port, log_level="warning")
    )

    if suite.expect_failure:
        logger.info("Starting FAILING suite '%s' (%s)", suite.name, suite.description)
        logger.info("These checks are designed to fail to show pipeline behavior")
    else:
        logger.info("Starting test suite '%s'", suite.name)

    serve_task = asyncio.create_task(server.serve())
    try:
        await _wait_until_started(server, serve_task, config)
        logger.info("Test server running on port %d", config.port)

        async with HarnessClient(config.base_url, timeout=config.request_timeout) as client:
            for title, step in suite.steps:
                logger.info("Testing %s...", title)
                await step(client)

        if suite.expect_failure:
            logger.warning("All tests passed! (This should not happen)")
        else:
            logger.info("All tests passed!")
        return EXIT_PASSED

    except Exception as exc:
        if suite.expect_failure:
            logger.error("Test failed as expected: %s", exc)
            logger.info("A red test stage stops the pipeline before deployment.")
        else:
            logger.error("Test failed: %s", exc)
        return EXIT_FAILED

    finally:
        server.should_exit = True
        await asyncio.gather(serve_task, return_exceptions=True)
        logger.debug("Test server on port %d stopped", config.port)

"""Command line entry point: serve the API or run the test harness.

Usage:
    pipeline-demo serve                       # listen on $PORT (default 3000)
    pipeline-demo harness                     # passing suite on port 3001, exit 0
    pipeline-demo harness --suite security    # a failure scenario on port 3002, exit 1
    pipeline-demo harness --suite failing     # the default failure scenario (api-contract)
    pipeline-demo scenarios                   # list failure scenarios
"""

import asyncio
from typing import Optional

import pydantic
import typer
import uvicorn

from pipeline_demo import __version__
from pipeline_demo.config import settings
from pipeline_demo.harness.config import HarnessConfig
from pipeline_demo.harness.runner import run_suite
from pipeline_demo.harness.suites import FAILURE_SCENARIOS, PASSING_SUITE
from pipeline_demo.main import create_app, setup_logging

app = typer.Typer(
    name="pipeline-demo",
    help="Toy user service and the test harness that gates its CI/CD pipeline",
    no_args_is_help=True,
)


def version_callback(v: bool) -> None:
    if v:
        typer.echo(f"v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "-v", "--version", is_eager=True, callback=version_callback
    )
) -> None:
    pass


@app.command("serve")
def cmd_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: $HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: $PORT)"),
) -> None:
    """Run the API server."""
    uvicorn.run(
        create_app(),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command("harness")
def cmd_harness(
    suite: str = typer.Option(
        PASSING_SUITE.name, "--suite", "-s",
        help="'passing', 'failing' (api-contract) or a failure scenario (see `pipeline-demo scenarios`)",
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Test port (3001 passing, 3002 failing)"),
    grace: float = typer.Option(0.1, "--grace", help="Seconds to wait after starting the server"),
) -> None:
    """Start the service on a test port, run one suite, exit 0 on pass and 1 on failure."""
    try:
        config = HarnessConfig(suite=suite, port=port, startup_grace=grace)
    except pydantic.ValidationError as exc:
        typer.echo(f"Invalid harness options:\n{exc}", err=True)
        raise typer.Exit(2)

    setup_logging(settings.log_level)
    raise typer.Exit(asyncio.run(run_suite(config)))


@app.command("scenarios")
def cmd_scenarios() -> None:
    """List the failure scenarios the harness can run."""
    for name, suite in FAILURE_SCENARIOS.items():
        typer.echo(f"{name:<16} {suite.description}")

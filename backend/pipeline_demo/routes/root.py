"""
Pipeline Demo — Root Route
===========================

What:  GET / returns a welcome message with the version and environment label.
Who:   First thing the pipeline's smoke test (and a curious human) hits.
"""

from fastapi import APIRouter, Depends

from pipeline_demo import __version__
from pipeline_demo.config import Settings, get_app_settings
from pipeline_demo.schemas.user import WelcomeResponse, utc_timestamp

router = APIRouter(tags=["Info"])

WELCOME_MESSAGE = "Welcome to CI/CD Python Demo App!"


@router.get(
    "/",
    response_model=WelcomeResponse,
    summary="Welcome message and app info",
)
async def read_root(settings: Settings = Depends(get_app_settings)) -> WelcomeResponse:
    return WelcomeResponse(
        message=WELCOME_MESSAGE,
        version=__version__,
        environment=settings.environment,
        timestamp=utc_timestamp(),
    )

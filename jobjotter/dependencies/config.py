"""Settings as a FastAPI dependency, so tests can swap in modified copies."""

from typing import Annotated

from fastapi import Depends

from jobjotter.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    return get_settings()


Settings = Annotated[AppSettings, Depends(get_app_settings)]

__all__ = ["Settings", "get_app_settings"]

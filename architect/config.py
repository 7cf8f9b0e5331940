"""
config.py — Client settings
============================
Reads settings from the environment (after loading a local ``.env``):

    ARCHITECT_API_BASE     generation service base URL   (http://localhost:8000)
    ARCHITECT_TIMEOUT      request timeout, seconds      (120)
    ARCHITECT_DEMO_MODE    use the offline demo service  (false)
    ARCHITECT_DEMO_DELAY   demo response delay, seconds  (2.0)
    ARCHITECT_EXPORT_DIR   where exports are written     (generated_project)
    ARCHITECT_LOG_LEVEL    logging level                 (WARNING)
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from architect.demo import DemoGenerationService
from architect.service import DEFAULT_TIMEOUT, GenerationService, HttpGenerationService

_TRUTHY = {"1", "true", "yes", "on"}


class ClientSettings(BaseModel):
    api_base: str = Field(
        "http://localhost:8000",
        description="Base URL of the generation service"
    )
    timeout: float = Field(
        DEFAULT_TIMEOUT,
        gt=0,
        description="Seconds before a generation request counts as a transport failure"
    )
    demo_mode: bool = Field(
        False,
        description="Serve canned results instead of calling the service"
    )
    demo_delay: float = Field(2.0, ge=0)
    export_dir: str = "generated_project"
    log_level: str = "WARNING"

    @field_validator("demo_mode", mode="before")
    @classmethod
    def _parse_flag(cls, value):
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def load_settings(env: Optional[Mapping[str, str]] = None) -> ClientSettings:
    """
    Builds settings from ``env`` (defaults to os.environ after load_dotenv).
    Unset variables fall back to the model defaults.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    fields = {
        "api_base": "ARCHITECT_API_BASE",
        "timeout": "ARCHITECT_TIMEOUT",
        "demo_mode": "ARCHITECT_DEMO_MODE",
        "demo_delay": "ARCHITECT_DEMO_DELAY",
        "export_dir": "ARCHITECT_EXPORT_DIR",
        "log_level": "ARCHITECT_LOG_LEVEL",
    }
    values = {name: env[var] for name, var in fields.items() if env.get(var)}
    return ClientSettings(**values)


def build_service(settings: ClientSettings) -> GenerationService:
    if settings.demo_mode:
        return DemoGenerationService(delay=settings.demo_delay)
    return HttpGenerationService(settings.api_base, timeout=settings.timeout)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

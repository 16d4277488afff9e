"""Runner configuration.

Values come from the process environment, with a `.env` file in the working
directory filling in anything not already set. They are read once, when the
runner starts:

- APISTEPS_DEBUG            "true" (any case) enables debug mode by default
- APISTEPS_MY_APP_URL       base URL saved in every scenario's cache as MY_APP_URL
- APISTEPS_JSON_SCHEMA_DIR  directory for relative JSON schema references,
                            relative to the working directory
- APISTEPS_HTTP_TIMEOUT     HTTP client timeout in seconds (default 10)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

logger = logging.getLogger(__name__)

ENV_DEBUG = "APISTEPS_DEBUG"
ENV_MY_APP_URL = "APISTEPS_MY_APP_URL"
ENV_JSON_SCHEMA_DIR = "APISTEPS_JSON_SCHEMA_DIR"
ENV_HTTP_TIMEOUT = "APISTEPS_HTTP_TIMEOUT"

# Cache key the base URL is saved under at every scenario start
MY_APP_URL_KEY = "MY_APP_URL"


class RunnerConfig(BaseModel):
    debug: bool = False
    my_app_url: str = ""
    json_schema_dir: Path = Field(default_factory=Path.cwd)
    http_timeout: float = Field(default=10.0, gt=0)

    @field_validator("my_app_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    def bootstrap_values(self) -> Dict[str, object]:
        """Values written into the cache before each scenario."""
        return {MY_APP_URL_KEY: self.my_app_url}


def load_config(environ: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> RunnerConfig:
    """Build the configuration from environ (default: os.environ).

    When dotenv is true a `.env` file is loaded first without overriding
    variables that are already set.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    env = os.environ if environ is None else environ

    schema_dir = Path.cwd() / env.get(ENV_JSON_SCHEMA_DIR, "")
    try:
        return RunnerConfig(
            debug=env.get(ENV_DEBUG, "").strip().lower() == "true",
            my_app_url=env.get(ENV_MY_APP_URL, ""),
            json_schema_dir=schema_dir,
            http_timeout=env.get(ENV_HTTP_TIMEOUT, "10"),
        )
    except PydanticValidationError as e:
        logger.error("Invalid runner configuration: %s", e)
        raise


__all__ = [
    "ENV_DEBUG",
    "ENV_MY_APP_URL",
    "ENV_JSON_SCHEMA_DIR",
    "ENV_HTTP_TIMEOUT",
    "MY_APP_URL_KEY",
    "RunnerConfig",
    "load_config",
]

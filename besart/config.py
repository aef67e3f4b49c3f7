"""Application configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

POSTGRES_URI_VAR = "POSTGRES_URI"


@dataclass(frozen=True)
class Config:
    """Settings the service needs to run."""

    postgres_uri: str = ""


def load_config(
    logger: logging.Logger | logging.LoggerAdapter,
    env_file: Optional[Union[str, os.PathLike]] = None,
) -> Config:
    """Load settings, first reading a ``.env`` file into the environment if present.

    Variables already set in the environment take precedence over the file.
    """
    path = Path(env_file) if env_file is not None else Path(".env")
    if path.is_file():
        load_dotenv(path, override=False)
    else:
        logger.warning("no .env found, using default envvar...", extra={"path": str(path)})

    return Config(postgres_uri=os.environ.get(POSTGRES_URI_VAR, ""))
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Real working directory of the process at startup.
APP_PATH = Path(os.path.realpath(os.getcwd()))


def resolve_env_path(file_name: str, base_dir: Optional[Path] = None) -> Path:
    return Path(base_dir if base_dir is not None else APP_PATH) / file_name


def create_env_file(
    file_name: str,
    data: Mapping[str, str],
    clear: bool = True,
    *,
    base_dir: Optional[Path] = None,
) -> Path:
    """
    Write `data` as KEY=VALUE lines.

    With `clear` an existing file is removed first; otherwise lines are appended
    after its current content. Values are written verbatim, without quoting.
    """
    env_path = resolve_env_path(file_name, base_dir)
    if clear and env_path.exists():
        env_path.unlink()
        logger.debug("Removed existing env file. path=%s", env_path)

    if data:
        with env_path.open("a", encoding="utf-8") as fh:
            for key, value in data.items():
                fh.write(f"{key}={value}\n")

    logger.info("Env file written. path=%s keys=%s cleared=%s", env_path, len(data), clear)
    return env_path


def set_env(file_name: str, *, base_dir: Optional[Path] = None, override: bool = False) -> bool:
    """Load an env file into os.environ. Variables already set are kept unless `override`."""
    env_path = resolve_env_path(file_name, base_dir)
    if not env_path.exists():
        logger.warning("Env file not found; nothing loaded. path=%s", env_path)
        return False
    # Values are literal; no ${VAR} expansion.
    loaded = load_dotenv(dotenv_path=env_path, override=override, interpolate=False)
    logger.info("Env file loaded. path=%s override=%s", env_path, override)
    return loaded

import logging
import os
from typing import Optional

from dotenv import load_dotenv

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


def configure_env(env_file_name: Optional[str] = None, *, override: bool = True) -> None:
    """
    Configure the application's environment.

    Args:
        env_file_name: Optional environment file name. If None, tries .env.<ENV>, then .env.
        override: Whether values from the file replace variables already set.
    """
    if env_file_name is not None:
        load_dotenv(env_file_name, override=override)
        return

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file, override=override):
            logging.debug(f"☑️ Loaded {env_file} file successfully")
            break


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable. Unrecognised values fall back to `default`."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logging.warning(f"Ignoring invalid boolean value `{value}` for `{name}`")
    return default

from .env_utils import configure_env, env_flag
from .logging import setup_logging, get_log_file_path
from .path_resolver import append_path, read_path, split_path
from .serialisation import serialise

__all__ = [
    "configure_env",
    "env_flag",
    "setup_logging",
    "get_log_file_path",
    "append_path",
    "read_path",
    "split_path",
    "serialise",
]

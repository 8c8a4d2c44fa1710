import os

from fast_constraints.utils.env_utils import configure_env, env_flag

# Variables already set in the process win over .env files at import time
configure_env(override=False)

STRICT_RESOLUTION: bool
CACHE_RESOLUTION: bool
DEFAULT_GROUP: str


def load_settings() -> None:
    """(Re)read the settings from the environment. `boot()` calls this after loading env files."""
    global STRICT_RESOLUTION, CACHE_RESOLUTION, DEFAULT_GROUP

    # Fail the whole run when a callback declaration cannot be resolved
    STRICT_RESOLUTION = env_flag("CONSTRAINTS_STRICT_RESOLUTION", True)

    # Cache resolved callbacks per (declaration, type)
    CACHE_RESOLUTION = env_flag("CONSTRAINTS_CACHE_RESOLUTION", True)

    # Group used when a declaration or a validation run names none
    DEFAULT_GROUP = os.getenv("CONSTRAINTS_DEFAULT_GROUP", "Default")


load_settings()

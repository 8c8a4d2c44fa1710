from typing import Optional

from fast_constraints import config
from fast_constraints.core.validator import Validator, get_validator, set_validator
from fast_constraints.utils.env_utils import configure_env
from fast_constraints.utils.logging import setup_logging

_booted = False


def boot(*,
    env_file_name: Optional[str] = None,
    log_file_name: Optional[str] = None,
    validator: Optional[Validator] = None,
) -> Validator:
    """
    Sets up callback constraints for an application.
    - Loads environment variables (.env.<ENV> / .env, or `env_file_name`)
    - Sets up logging
    - Re-reads the CONSTRAINTS_* settings
    - Installs the process-wide validator

    Args:
        env_file_name: Optional environment file to load instead of .env.
        log_file_name: Optional log file name (defaults to LOG_FILE_NAME or app.log).
        validator: Validator to install. A default one is built from the settings otherwise.

    Returns:
        The installed process-wide validator.
    """
    global _booted
    if _booted and validator is None:
        return get_validator()

    configure_env(env_file_name)
    setup_logging(log_file_name)
    config.load_settings()

    validator = validator or Validator()
    set_validator(validator)

    _booted = True
    return validator

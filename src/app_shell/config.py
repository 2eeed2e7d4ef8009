import logging
import os
from pathlib import Path

from src.rules.models import Rules

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when operational requirements are not met at startup."""


def resolve_data_dir(rules: Rules) -> Path:
    """Data directory from the configured environment variable (default ./data)."""
    return Path(os.environ.get(rules.ops.data_dir_env, "./data"))


def resolve_db_path(rules: Rules) -> Path:
    return resolve_data_dir(rules) / rules.storage.db_filename


def resolve_migrations_dir(rules: Rules, base_dir: Path) -> Path:
    path = Path(rules.storage.migrations_dir)
    return path if path.is_absolute() else base_dir / path


def validate_ops_rules(rules: Rules, base_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    """
    # 1. Required env
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    # 2. Migrations must ship with the deployment
    migrations_dir = resolve_migrations_dir(rules, base_dir)
    if not migrations_dir.is_dir():
        raise ConfigurationError(f"Migrations directory not found: {migrations_dir}")

    # 3. Data dir must be creatable
    data_dir = resolve_data_dir(rules)
    data_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Configuration validated.")

"""Application bootstrap: DB schema and logging."""

from .env_settings import get_env
from .log_config import setup_logging
from .schema import ensure_schema


def initialize_application():
    """Initialize the application with required setup steps."""
    env = get_env()
    setup_logging(level=env.log_level, retention_days=env.log_retention_days, log_dir=env.log_dir)

    ensure_schema()

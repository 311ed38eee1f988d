from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    sqlite_path: str = Field("data/wallet_auth.db", alias="WALLET_AUTH_SQLITE_PATH")

    log_level: str = Field("INFO", alias="WALLET_AUTH_LOG_LEVEL")
    log_retention_days: int = Field(30, alias="WALLET_AUTH_LOG_RETENTION_DAYS")
    log_dir: str = Field("", alias="WALLET_AUTH_LOG_DIR")  # empty -> <cwd>/data/logs

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_PATH = "church_app.db"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "t"]


@dataclass(frozen=True)
class Config:
    database_path: str = DEFAULT_DATABASE_PATH
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        # Load environment variables
        load_dotenv()
        return cls(
            database_path=os.getenv("CHURCH_APP_DB_PATH", DEFAULT_DATABASE_PATH),
            log_level=os.getenv("CHURCH_APP_LOG_LEVEL", "INFO").upper(),
            sql_echo=_env_flag("CHURCH_APP_SQL_ECHO"),
        )

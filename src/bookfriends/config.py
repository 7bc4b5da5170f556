import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from .groups import DEFAULT_CODE_ATTEMPTS

ENV_FILE = Path.home() / ".bookfriends_env"


class Settings(BaseModel):
    home: Path = Path.home() / ".bookfriends"
    code_attempts: int = DEFAULT_CODE_ATTEMPTS
    log_level: str = "WARNING"


def load_settings() -> Settings:
    # A local .env wins over the per-user file; real environment wins over both.
    load_dotenv(".env")
    load_dotenv(ENV_FILE)

    defaults = Settings()
    return Settings(
        home=Path(os.getenv("BOOKFRIENDS_HOME", str(defaults.home))).expanduser(),
        code_attempts=int(os.getenv("BOOKFRIENDS_CODE_ATTEMPTS", defaults.code_attempts)),
        log_level=os.getenv("BOOKFRIENDS_LOG_LEVEL", defaults.log_level).upper(),
    )

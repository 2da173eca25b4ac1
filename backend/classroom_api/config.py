"""Application settings and validation."""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    ENV: str
    DATABASE_URL: str
    FRONTEND_URL: str | None
    PORT: int
    DB_ECHO: bool
    CREATE_TABLES: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
        self.FRONTEND_URL = os.getenv("FRONTEND_URL") or None
        self.PORT = int(os.getenv("PORT", "8000"))
        self.DB_ECHO = _env_flag("DB_ECHO", "false")
        self.CREATE_TABLES = _env_flag("CREATE_TABLES", "true")
        self._validate()

    def _validate(self):
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not defined")

    @property
    def cors_origins(self) -> list[str]:
        if self.FRONTEND_URL:
            return [self.FRONTEND_URL]
        return ["*"]

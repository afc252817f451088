import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "dev-only-change-me"

DEFAULT_ALLOWED_ORIGINS = [
    "https://loanbaazar.in",
    "https://www.loanbaazar.in",
    "http://localhost:3000",
    "http://localhost:5173",
]

DEFAULT_ORIGIN_PATTERNS = [
    r"https://[a-z0-9-]+\.up\.railway\.app",
    r"https://[a-z0-9-]+\.vercel\.app",
]


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    port: int = 5000
    database_url: str = "sqlite:///./contacts.db"
    log_level: str = "INFO"

    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24

    admin_username: str | None = None
    admin_password: str | None = None

    google_service_account_email: str | None = None
    google_private_key: str | None = None
    google_spreadsheet_id: str | None = None
    google_sheet_range: str = "Sheet1!A:E"

    allowed_origins: tuple[str, ...] = Field(default_factory=lambda: tuple(DEFAULT_ALLOWED_ORIGINS))
    allowed_origin_patterns: tuple[str, ...] = Field(default_factory=lambda: tuple(DEFAULT_ORIGIN_PATTERNS))

    @property
    def sheets_enabled(self) -> bool:
        return bool(
            self.google_service_account_email
            and self.google_private_key
            and self.google_spreadsheet_id
        )

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        if environ is None:
            # variables already set in the process win over the .env file
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ
        else:
            env = environ

        jwt_secret = env.get("JWT_SECRET")
        if not jwt_secret:
            logger.warning("JWT_SECRET is not set, using the development secret")
            jwt_secret = DEV_JWT_SECRET

        private_key = env.get("GOOGLE_PRIVATE_KEY")
        if private_key:
            # keys pasted into env files keep their newlines escaped
            private_key = private_key.replace("\\n", "\n")

        return cls(
            port=int(env.get("PORT", "5000")),
            database_url=env.get("DATABASE_URL", "sqlite:///./contacts.db"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            jwt_secret=jwt_secret,
            admin_username=env.get("ADMIN_USERNAME") or None,
            admin_password=env.get("ADMIN_PASSWORD") or None,
            google_service_account_email=env.get("GOOGLE_SERVICE_ACCOUNT_EMAIL") or None,
            google_private_key=private_key or None,
            google_spreadsheet_id=env.get("GOOGLE_SPREADSHEET_ID") or None,
            google_sheet_range=env.get("GOOGLE_SHEET_RANGE", "Sheet1!A:E"),
            allowed_origins=tuple(DEFAULT_ALLOWED_ORIGINS + _split_csv(env.get("ALLOWED_ORIGINS"))),
            allowed_origin_patterns=tuple(
                DEFAULT_ORIGIN_PATTERNS + _split_csv(env.get("ALLOWED_ORIGIN_PATTERNS"))
            ),
        )

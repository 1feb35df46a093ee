import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Settings:
    # -------------------------------------------------------
    # Project
    # -------------------------------------------------------
    PROJECT_NAME: str = "Family Encyclopedia API"
    ENV: str = os.getenv("ENV", "dev")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # -------------------------------------------------------
    # Database
    # -------------------------------------------------------
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./encyclopedia.db"
    )

    # Hosted Postgres hands out postgres:// but SQLAlchemy needs postgresql://
    if DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

    # -------------------------------------------------------
    # Authentication / JWT
    # -------------------------------------------------------
    SECRET_KEY: str = os.getenv(
        "SECRET_KEY",
        "supersecretlocalkey123"   # Only used for local dev
    )
    ALGORITHM: str = "HS256"

    # 1 day token expiry by default
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24)
    )

    # -------------------------------------------------------
    # CORS (comma separated origins)
    # -------------------------------------------------------
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if origin.strip()
    ]

    # -------------------------------------------------------
    # Content
    # -------------------------------------------------------
    DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "sr")

    # asserted  -> only the asserting member sees the stored type
    # symmetric -> the related member sees the inverse type where one exists
    RELATIONSHIP_VIEW: str = os.getenv("RELATIONSHIP_VIEW", "asserted")

    # -------------------------------------------------------
    # Translation provider
    # -------------------------------------------------------
    TRANSLATION_BACKEND: str = os.getenv("TRANSLATION_BACKEND", "google")

    GOOGLE_TRANSLATE_API_KEY: str | None = os.getenv("GOOGLE_TRANSLATE_API_KEY")
    GOOGLE_TRANSLATE_URL: str = os.getenv(
        "GOOGLE_TRANSLATE_URL",
        "https://translation.googleapis.com/language/translate/v2"
    )

    # seconds
    TRANSLATE_TIMEOUT: float = float(os.getenv("TRANSLATE_TIMEOUT", 30))


# Single instance that is imported everywhere
settings = Settings()

import os
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    TMDB_API_KEY = os.getenv("TMDB_API_KEY")

    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "30"))
    TMDB_TIMEOUT = float(os.getenv("TMDB_TIMEOUT", "5"))

    POSTER_MAX_WORKERS = int(os.getenv("POSTER_MAX_WORKERS", "5"))
    ENABLE_POSTERS = _get_bool("ENABLE_POSTERS", True)

    CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


settings = Settings()

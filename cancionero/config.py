"""
Cancionero - Configuration
All settings loaded from environment variables with sensible defaults.

The songbook lives in a single JSON file next to the package.  Its location
is fixed; only the network settings and logging are configurable.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
_ = load_dotenv()


def _int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = _int(os.getenv("PORT"), 3000)
APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent

# Backing file for the whole collection.  Absent until the first write.
DATA_PATH = BASE_DIR / "repertorio.json"

# Client UI assets, mounted at "/" when present
PUBLIC_DIR = BASE_DIR / "public"

# ---------------------------------------------------------------------------
# Logging (stdout only)
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Cross-origin
#
# The client may be opened from file:// or from another port, so every
# response allows any origin.
# ---------------------------------------------------------------------------
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# ---------------------------------------------------------------------------
# Client-facing messages
# ---------------------------------------------------------------------------
MSG_MISSING_FIELDS = "Faltan campos requeridos."
MSG_NOT_FOUND = "Canción no encontrada."
MSG_DUPLICATE_ID = "Ya existe una canción con ese id."
MSG_DELETED = "Canción eliminada."
MSG_INTERNAL_ERROR = "Error interno del servidor."

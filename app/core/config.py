# app/core/config.py

import os
from pathlib import Path

from dotenv import load_dotenv


def _select_env_file() -> Path:
    """Pick the .env file for the current ENV (local, staging or production)."""
    root = Path(__file__).resolve().parents[2]
    env_name = os.getenv("ENV", "local").lower()

    if env_name == "staging":
        return root / ".env.staging"
    if env_name in {"prod", "production"}:
        return root / ".env.production"
    return root / ".env"


load_dotenv(dotenv_path=_select_env_file())

# DataForSEO Labs settings
DATAFORSEO_API_BASE = os.getenv("DATAFORSEO_API_BASE", "https://api.dataforseo.com/v3").rstrip("/")
DATAFORSEO_LOCATION_CODE = int(os.getenv("DATAFORSEO_LOCATION_CODE", "2840"))  # United States
DATAFORSEO_LANGUAGE_CODE = os.getenv("DATAFORSEO_LANGUAGE_CODE", "en")
DATAFORSEO_TIMEOUT = float(os.getenv("DATAFORSEO_TIMEOUT", "30"))

# Minimum connection strength for a keyword to form or join a cluster (0.0 to 1.0)
CONNECTION_STRENGTH_THRESHOLD = float(os.getenv("CONNECTION_STRENGTH_THRESHOLD", "0.3"))

# CORS origins
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
FRONTEND_URL_PROD = os.getenv("FRONTEND_URL_PROD")

import os
from typing import Optional

# Database connection URL (async)
# Example: "postgresql+asyncpg://user@localhost/places_db"
SQLALCHEMY_DATABASE_URL: str = os.environ["DATABASE_URL"]

# Allow requests from this origin
ALLOW_ORIGIN: Optional[str] = os.environ.get("ALLOW_ORIGIN")

# If true, enable docs and openapi.json endpoints
ENABLE_DOCS: bool = os.environ.get("ENABLE_DOCS") == "1"

# Firebase storage bucket for place and user images
STORAGE_BUCKET: str = os.environ.get("STORAGE_BUCKET", "places-app.appspot.com")

# Google Geocoding API
GOOGLE_API_KEY: str = os.environ.get("GOOGLE_API_KEY", "")
GEOCODING_URL: str = os.environ.get("GEOCODING_URL", "https://maps.googleapis.com/maps/api/geocode/json")
GEOCODING_TIMEOUT: float = float(os.environ.get("GEOCODING_TIMEOUT", "10"))

# Max upload size in bytes
MAX_IMAGE_SIZE: int = int(os.environ.get("MAX_IMAGE_SIZE", str(10 * 1024 * 1024)))

# If false, disable rate limiting (used by tests)
RATE_LIMIT_ENABLED: bool = os.environ.get("RATE_LIMIT_ENABLED", "1") == "1"

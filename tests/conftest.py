import os

# Must be set before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./places_test.db")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from tests.fixtures import app, client, create, engine, session  # noqa: E402,F401

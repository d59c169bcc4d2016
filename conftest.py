import os

# Default to an in-memory SQLite store for tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

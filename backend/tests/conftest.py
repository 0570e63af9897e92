"""Root conftest — shared test configuration."""

import os

# Ensure tests never sign with a real secret or reach a real database
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-account-service")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Minimum bcrypt cost keeps hashing fast under test
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

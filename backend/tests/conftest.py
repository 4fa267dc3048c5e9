"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up a real deployment secret
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("LOG_FORMAT", "text")

"""Runtime settings, read once from the environment."""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./visacms.db")

# Base URL the public pages use to reach the collection endpoints
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")

SITE_NAME = os.getenv("SITE_NAME", "VJC Overseas")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MUTATION_RATE_LIMIT = os.getenv("MUTATION_RATE_LIMIT", "30/minute")

FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "10"))  # seconds

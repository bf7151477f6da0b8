import os

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
API_TOKEN = os.getenv("API_TOKEN") or None

REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Fallback release of the roster sync guard when nobody signals "settled"
SYNC_COOLDOWN_SECONDS = float(os.getenv("SYNC_COOLDOWN_SECONDS", "2"))

DEBUG = True

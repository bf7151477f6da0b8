API_BASE_URL = "http://testserver/api"
API_TOKEN = "test-token"

REQUEST_TIMEOUT = 1.0

LOG_LEVEL = "DEBUG"

SYNC_COOLDOWN_SECONDS = 0.01

DEBUG = False
TESTING = True

"""Hard-coded configuration constants not meant to be user-configurable."""

SERVICE_NAME = "shiptivity-api"
API_PREFIX = "/api/v1"
DEFAULT_DB_PATH = "./clients.db"
DEFAULT_SERVER_PORT = 3001
MIN_SERVER_PORT = 1
MAX_SERVER_PORT = 65535

"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

# Logging
LOG_DIR = OUTPUT_DIR / "logs"
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

LOG_DIR.mkdir(parents=True, exist_ok=True)

# Record source: "json" (local file), "sql" (SQLAlchemy) or "firestore" (REST)
RECORD_SOURCE = os.getenv("RECORD_SOURCE", "json").strip().lower()
RECORDS_PATH = Path(os.getenv("RECORDS_PATH", str(DATA_DIR / "user_requests.json")))
STATUS_PATH = Path(os.getenv("STATUS_PATH", str(DATA_DIR / "request_status.json")))

# Database (sql source)
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'requests.sqlite'}")

# Firestore REST (firestore source)
FIRESTORE_PROJECT_ID = os.getenv("FIRESTORE_PROJECT_ID", "")
FIRESTORE_API_KEY = os.getenv("FIRESTORE_API_KEY", "")
FIRESTORE_COLLECTION = os.getenv("FIRESTORE_COLLECTION", "userRequests")
FIRESTORE_STATUS_COLLECTION = os.getenv("FIRESTORE_STATUS_COLLECTION", "requestStatus")
FIRESTORE_PAGE_SIZE = int(os.getenv("FIRESTORE_PAGE_SIZE", "300"))
FIRESTORE_BASE_URL = os.getenv(
    "FIRESTORE_BASE_URL",
    "https://firestore.googleapis.com/v1",
).rstrip("/")

# Courier proxy
DEFAULT_COURIER = os.getenv("DEFAULT_COURIER", "steadfast").strip().lower()
COURIER_TIMEOUT_SECONDS = float(os.getenv("COURIER_TIMEOUT_SECONDS", "30"))
STEADFAST_BASE_URL = os.getenv("STEADFAST_BASE_URL", "https://portal.packzy.com/api/v1").rstrip("/")
STEADFAST_API_KEY = os.getenv("STEADFAST_API_KEY", "")
STEADFAST_SECRET_KEY = os.getenv("STEADFAST_SECRET_KEY", "")
PATHAO_BASE_URL = os.getenv("PATHAO_BASE_URL", "https://api-hermes.pathao.com").rstrip("/")
PATHAO_ACCESS_TOKEN = os.getenv("PATHAO_ACCESS_TOKEN", "")
PATHAO_STORE_ID = os.getenv("PATHAO_STORE_ID", "")

# Presentation
# Collation locale for text sorting; "" uses the environment (LC_ALL / LC_COLLATE / LANG)
SORT_LOCALE = os.getenv("SORT_LOCALE", "")
DISPLAY_TIME_FORMAT = os.getenv("DISPLAY_TIME_FORMAT", "%m/%d/%Y, %I:%M:%S %p")
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
SHOP_NAME = os.getenv("SHOP_NAME", "Request Desk")
GREETING_TEMPLATE = os.getenv(
    "GREETING_TEMPLATE",
    "Hello {name}, thank you for your request. We are processing it now.",
)
INVOICE_STATUS_LABEL = os.getenv("INVOICE_STATUS_LABEL", "Invoice Generated")

# HTTP server
SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))

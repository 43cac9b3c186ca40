# Store Settings
KEY_DELIMITER = "\n\n###\n\n"
EMPTY_FINGERPRINT = ""  # "never observed" sentinel
STORE_INDENT = 4
DEFAULT_STORE_PATH = "~/tmp/doc_scraper_hashes.json"

# Cache Busting
DEFAULT_CACHE_BUST_PARAM = "nocache"
CACHE_BUST_TOKEN_MAX = 1_000_000

# Network Settings
DEFAULT_FETCH_TIMEOUT = 30  # seconds, whole request
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

# Notification Settings
TELEGRAM_API_BASE = "https://api.telegram.org"
TELEGRAM_MAX_MESSAGE_LENGTH = 4096
DEFAULT_NOTIFY_RETRIES = 3
NOTIFY_RETRY_DELAY = 2.0

# Exit Statuses
EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_FATAL = 2

# Default Configuration Values
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = ""  # empty disables the file handler
DEFAULT_LOG_FORMAT = "text"  # text or json
DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_LOG_BACKUP_COUNT = 3
DEFAULT_LOG_TIMEZONE = "UTC"

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# --- DigitalOcean API ---
DIGITALOCEAN_TOKEN = os.getenv("DIGITALOCEAN_TOKEN")
DIGITALOCEAN_API_URL = os.getenv("DIGITALOCEAN_API_URL", "https://api.digitalocean.com/v2")
REQUEST_TIMEOUT_SEC = float(os.getenv("REQUEST_TIMEOUT_SEC", "30"))
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "200"))
MAX_PAGES = int(os.getenv("MAX_PAGES", "100"))

# --- Synchronization ---
POLL_INTERVAL_SEC = float(os.getenv("POLL_INTERVAL_SEC", "60"))
FETCH_TIMEOUT_SEC = float(os.getenv("FETCH_TIMEOUT_SEC", "120"))
FETCH_ATTEMPTS = int(os.getenv("FETCH_ATTEMPTS", "2"))
FETCH_RETRY_BACKOFF_SEC = float(os.getenv("FETCH_RETRY_BACKOFF_SEC", "1.0"))
MAX_CONCURRENT_FETCHES = int(os.getenv("MAX_CONCURRENT_FETCHES", "6"))

# --- Exposition ---
METRICS_HOST = os.getenv("METRICS_HOST", "0.0.0.0")
METRICS_PORT = int(os.getenv("METRICS_PORT", "9100"))
METRICS_PREFIX = os.getenv("METRICS_PREFIX", "digitalocean_")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG", "INFO").upper()
LOG_JSON = _env_bool("LOG_JSON", True)

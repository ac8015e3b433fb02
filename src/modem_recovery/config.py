# --- Standard library imports ---
import os

# --- Third-party imports ---
from dotenv import load_dotenv


# Load .env once
load_dotenv()

DEFAULT_TEST_URLS = (
    "https://www.google.com",
    "https://cloudflare.com",
    "https://www.example.com",
)

def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"

def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class Config:
    """Centralized config for polling, probing and hardware parameters"""

    # --- Poll Policy ---
    CHECK_INTERVAL_MS = _env_int("CHECK_INTERVAL_MS", 5000)
    MAX_ATTEMPTS = _env_int("MAX_ATTEMPTS", 60)

    # --- Probe Policy ---
    PROBE_ORDER = _env_list("PROBE_ORDER", ("ping", "dns", "http"))
    PING_HOST = os.getenv("PING_HOST", "8.8.8.8")
    DNS_HOSTNAME = os.getenv("DNS_HOSTNAME", "google.com")
    TEST_URLS = _env_list("TEST_URLS", DEFAULT_TEST_URLS)

    PING_TIMEOUT = _env_float("PING_TIMEOUT", 2)   # seconds (ping -W)
    DNS_TIMEOUT = _env_float("DNS_TIMEOUT", 5)     # seconds
    HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 5)   # seconds, per URL

    # --- Notification Policy ---
    NOTIFY_ENABLED = _env_bool("NOTIFY_ENABLED", "true")
    NOTIFY_ICON = os.getenv("NOTIFY_ICON", "network-wireless")

    # --- Network Policy (NOT user configurable) ---
    API_TIMEOUT = 8   # seconds (smart plug relay calls)

    # --- Observability Policy ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_TIMING = _env_bool("LOG_TIMING", "false")

    # --- Hardware ---
    class Hardware:
        PLUG_IP = os.getenv("PLUG_IP")

        # Power-off hold time before switching the relay back on
        REBOOT_DELAY = _env_int("REBOOT_DELAY", 30)

        # Settle time after the restart was submitted, before polling starts
        INIT_DELAY = _env_int("INIT_DELAY", 5)

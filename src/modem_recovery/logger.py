# --- Standard library imports ---
import sys
import logging

# --- Project imports ---
from .config import Config


APP_NAMESPACE = "modem_recovery"

# --- Custom log levels ---
TIMING = 25   # Between INFO (20) and WARNING (30)
logging.addLevelName(TIMING, "TIME")

def _timing(self, message, *args, **kwargs):
    if self.isEnabledFor(TIMING):
        self._log(TIMING, message, args, stacklevel=2, **kwargs)

# Probe and monitor latency lines go through logger.timing(...)
logging.Logger.timing = _timing

# --- Level styling: emoji + short tag per level ---
LEVEL_STYLES = {
    logging.DEBUG: ("🧱", "DBG"),
    logging.INFO: ("ℹ️ ", "INFO"),
    TIMING: ("⚡️", "TIME"),
    logging.WARNING: ("⚠️ ", "WARN"),
    logging.ERROR: ("❌", "ERR"),
    logging.CRITICAL: ("🔥", "FATAL"),
}

CONSOLE_FORMAT = "[%(asctime)s] %(levelemoji)s %(levelshort)-5s %(component)s:%(funcName)s → %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


class TimingFilter(logging.Filter):
    """Pass TIME records only when latency logging is switched on."""

    def __init__(self, enabled: bool):
        super().__init__()
        self.enabled = enabled

    def filter(self, record: logging.LogRecord) -> bool:
        return self.enabled or record.levelno != TIMING


class ConsoleFormatter(logging.Formatter):
    """
    Operator-facing console format.

    Adds `levelemoji`, a fixed-width `levelshort` tag and `component`
    (the logger name without the application prefix) to each record,
    so a line reads like:

        [14:02:11] ℹ️  INFO  monitor:wait_for_internet → Attempt 3/60 ...
    """

    def format(self, record: logging.LogRecord) -> str:
        emoji, short = LEVEL_STYLES.get(record.levelno, ("", record.levelname))
        record.levelemoji = emoji
        record.levelshort = short
        record.component = record.name.removeprefix(f"{APP_NAMESPACE}.")
        return super().format(record)


def setup_logging(level=logging.INFO, log_timing: bool | None = None) -> None:
    """
    Route all logging to stdout with the console format.

    Args:
        level: Root log level.
        log_timing: Show TIME-level latency lines. Defaults to Config.LOG_TIMING.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ConsoleFormatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    handler.addFilter(TimingFilter(
        enabled=Config.LOG_TIMING if log_timing is None else log_timing
    ))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_NAMESPACE}.{name}")

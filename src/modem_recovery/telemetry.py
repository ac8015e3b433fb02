# --- Standard library imports ---
import logging


BANNER = "═" * 47

def tlog(
    logger: logging.Logger,
    emoji: str,
    phase: str,
    state: str,
    primary: str = "---",
    meta: str | None = None,
    level: int = logging.INFO,
) -> None:
    """
    Emit one aligned status line.

    Format:
        PHASE STATE PRIMARY | meta data
    """
    msg = f"{phase:<10} {state:<12} {primary:<16}"
    if meta:
        msg += f" | {meta}"

    logger.log(level, f"{emoji} {msg}", stacklevel=2)

def banner(logger: logging.Logger, *lines: str, level: int = logging.INFO) -> None:
    """Log lines framed by a horizontal rule, used for phase headers."""
    logger.log(level, BANNER, stacklevel=2)
    for line in lines:
        logger.log(level, line, stacklevel=2)
    logger.log(level, BANNER, stacklevel=2)

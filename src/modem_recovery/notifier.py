# --- Standard library imports ---
import subprocess
from dataclasses import dataclass

# --- Project imports ---
from .config import Config
from .logger import get_logger


logger = get_logger("notifier")

URGENCY_LEVELS = ("low", "normal", "critical")

# Ceiling for the notify-send process
NOTIFY_TIMEOUT_S = 5


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    urgency: str = "normal"

    def __post_init__(self) -> None:
        if self.urgency not in URGENCY_LEVELS:
            raise ValueError(f"Unknown urgency {self.urgency!r}")


class DesktopNotifier:
    """
    Linux desktop notifications through `notify-send`.

    Fire-and-forget: failures are logged as warnings and reported as
    False, never raised.
    """

    def __init__(self, enabled: bool | None = None, icon: str | None = None):
        self.enabled = Config.NOTIFY_ENABLED if enabled is None else enabled
        self.icon = Config.NOTIFY_ICON if icon is None else icon

    def command(self, note: Notification) -> list[str]:
        return [
            "notify-send",
            "-u", note.urgency,
            "-i", self.icon,
            note.title,
            note.body,
        ]

    def send(self, note: Notification) -> bool:
        if not self.enabled:
            logger.debug(f"Notifications disabled; skipping {note.title!r}")
            return False

        try:
            subprocess.run(
                self.command(note),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=NOTIFY_TIMEOUT_S,
                check=True,
            )
            return True
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            logger.warning(f"Failed to send notification: exit {e.returncode} {stderr}")
        except subprocess.TimeoutExpired:
            logger.warning(f"Failed to send notification: notify-send hung > {NOTIFY_TIMEOUT_S}s")
        except OSError as e:
            logger.warning(f"Failed to send notification: {e}")
        return False

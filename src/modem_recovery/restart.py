# --- Standard library imports ---
import time

# --- Third-party imports ---
import requests

# --- Project imports ---
from .config import Config
from .logger import get_logger


logger = get_logger("restart")


class SmartPlugRestartDriver:
    """
    Restart the appliance by power-cycling the Shelly-style smart plug
    it is connected to.

    This class performs NO health checks. Confirming that connectivity
    came back is the ConnectivityMonitor's job; restart() only reports
    whether the power-cycle command sequence was accepted.
    """

    def __init__(
            self,
            plug_ip: str | None = None,
            reboot_delay: int | None = None,
            timeout: float | None = None,
        ):
        self.plug_ip = plug_ip or Config.Hardware.PLUG_IP
        self.reboot_delay = (
            Config.Hardware.REBOOT_DELAY if reboot_delay is None else reboot_delay
        )
        self.timeout = Config.API_TIMEOUT if timeout is None else timeout

    def relay_url(self, state: str) -> str:
        return f"http://{self.plug_ip}/relay/0?turn={state}"

    def restart(self) -> bool:
        """
        Returns:
            True if both relay commands succeeded, False otherwise.
        """
        if not self.plug_ip:
            logger.error("PLUG_IP is not configured; cannot power-cycle the modem")
            return False

        try:
            # Power OFF
            off = requests.get(self.relay_url("off"), timeout=self.timeout)
            off.raise_for_status()
            logger.info("🔌 Smart plug powered OFF")
            logger.info(f"Waiting {self.reboot_delay}s before restoring power...")
            time.sleep(self.reboot_delay)

            # Power ON
            on = requests.get(self.relay_url("on"), timeout=self.timeout)
            on.raise_for_status()
            logger.info("🔌 Smart plug powered ON")
            return True

        except requests.RequestException:
            logger.exception("Failed to communicate with smart plug")
            return False

# --- Standard library imports ---
import sys
import time
import logging

# --- Project imports ---
from .config import Config
from .logger import get_logger, setup_logging
from .telemetry import banner
from .notifier import DesktopNotifier
from .policy import ProbeConfig, PollPolicy
from .restart import SmartPlugRestartDriver
from .monitor import ConnectivityMonitor, MonitorOutcome


def run(driver: SmartPlugRestartDriver | None, monitor: ConnectivityMonitor) -> MonitorOutcome | None:
    """
    Restart the appliance (when a driver is given) and hand off to the
    monitor.

    Returns:
        The monitor's outcome, or None if the restart itself failed.
    """
    logger = get_logger("main")

    if driver is None:
        logger.info("No PLUG_IP configured; assuming the modem was restarted manually")
    else:
        logger.info(f"Starting modem restart process (plug {driver.plug_ip})...")
        if not driver.restart():
            logger.error("Modem restart failed; not waiting for connectivity")
            return None

        banner(
            logger,
            "Modem restart process completed!",
            "Modem will be active again in approximately 1-2 minutes.",
        )

    if Config.Hardware.INIT_DELAY > 0:
        logger.info(f"Waiting {Config.Hardware.INIT_DELAY}s for the restart to begin...")
        time.sleep(Config.Hardware.INIT_DELAY)

    return monitor.wait_for_internet()

def main() -> int:
    """
    Entry point: configure logging, build the immutable policies and run
    one restart-and-confirm cycle.

    Exit status is 0 when connectivity was restored, 1 otherwise.
    """
    setup_logging(level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
    logger = get_logger("main")
    logger.debug(f"Python version: {sys.version}")

    # Configuration errors abort here, before any side effects
    probe_config = ProbeConfig.from_config()
    poll_policy = PollPolicy.from_config()
    logger.debug(f"Poll policy: {poll_policy.summary()}")

    driver = SmartPlugRestartDriver() if Config.Hardware.PLUG_IP else None
    monitor = ConnectivityMonitor(probe_config, poll_policy, notifier=DesktopNotifier())

    try:
        outcome = run(driver, monitor)
    except Exception as e:
        logger.exception(f"Unhandled exception during restart cycle: {e}")
        return 1

    return 0 if outcome is not None and outcome.restored else 1

if __name__ == "__main__":
    sys.exit(main())

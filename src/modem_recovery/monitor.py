# --- Standard library imports ---
import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

# --- Project imports ---
from .logger import get_logger
from .telemetry import tlog, banner
from .notifier import Notification
from .policy import ProbeConfig, PollPolicy
from .probes import ProbeResult, ProbeStrategy, build_strategies


@dataclass(frozen=True)
class MonitorOutcome:
    """
    Terminal result of one wait_for_internet() run.

    Exactly one outcome is produced per run. When `restored` is True,
    `attempts_used` is the attempt on which connectivity was first seen.
    """
    restored: bool
    elapsed_seconds: float
    attempts_used: int
    cancelled: bool = False

    @property
    def state(self) -> str:
        if self.restored:
            return "RESTORED"
        return "CANCELLED" if self.cancelled else "EXHAUSTED"


class ConnectivityMonitor:
    """
    Post-restart connectivity confirmation.

    • check_internet(): ordered, short-circuit evaluation of the probe set
    • wait_for_internet(): fixed-interval poll loop bounded by max_attempts

    Probe failures are absorbed (logged only); the only failure channel is
    the returned MonitorOutcome. Configuration is validated before it
    reaches this class, so nothing raises during polling.
    """

    def __init__(
            self,
            probe_config: ProbeConfig,
            poll_policy: PollPolicy,
            notifier=None,
            strategies: Optional[list[ProbeStrategy]] = None,
            clock: Callable[[], float] = time.monotonic,
            sleep: Optional[Callable[[float], object]] = None,
            cancel_event: Optional[threading.Event] = None,
        ):
        self.probe_config = probe_config
        self.poll_policy = poll_policy
        self.notifier = notifier
        self.strategies = (
            list(strategies) if strategies is not None
            else build_strategies(probe_config)
        )
        self.cancel_event = cancel_event
        self.logger = get_logger("monitor")

        self._clock = clock
        if sleep is None:
            # Event.wait doubles as an interruptible sleep
            sleep = cancel_event.wait if cancel_event is not None else time.sleep
        self._sleep = sleep

    # ─── Single decision ───

    def probe(self) -> ProbeResult:
        """
        Run the probes in priority order and stop at the first success.
        Nothing is cached: every call probes the network live.
        """
        start = time.perf_counter()

        for strategy in self.strategies:
            lap = time.perf_counter()
            try:
                ok = bool(strategy.check())
            except Exception:
                self.logger.warning(
                    f"{strategy.kind.label} probe raised; treating as DOWN",
                    exc_info=True,
                )
                ok = False

            self.logger.timing(
                f"Timing | {strategy.kind.label:<16} {'UP' if ok else 'DOWN':<4} "
                f"[{(time.perf_counter() - lap) * 1000:8.1f} ms]"
            )
            if ok:
                return ProbeResult(True, strategy.kind, time.perf_counter() - start)

        return ProbeResult(False, None, time.perf_counter() - start)

    def check_internet(self) -> bool:
        result = self.probe()
        if result.reachable:
            self.logger.debug(f"Connectivity confirmed by {result.strategy.label} probe")
        else:
            self.logger.debug("All probes reported the network unreachable")
        return result.reachable

    # ─── Poll loop ───

    def wait_for_internet(self) -> MonitorOutcome:
        """
        Poll check_internet() every check_interval until it succeeds or
        max_attempts is used up. Always returns a terminal outcome.
        """
        max_attempts = self.poll_policy.max_attempts
        banner(self.logger, "Checking internet connection...")

        attempt = 0
        start = self._clock()

        while True:
            attempt += 1
            elapsed = self._clock() - start
            self.logger.info(
                f"→ Attempt {attempt}/{max_attempts} ({int(elapsed)} seconds elapsed)..."
            )

            restored = self.check_internet()
            elapsed = self._clock() - start

            if restored:
                return self._finish(MonitorOutcome(True, elapsed, attempt))

            if attempt >= max_attempts:
                return self._finish(MonitorOutcome(False, elapsed, attempt))

            self._sleep(self.poll_policy.check_interval_s)

            if self.cancel_event is not None and self.cancel_event.is_set():
                elapsed = self._clock() - start
                return self._finish(
                    MonitorOutcome(False, elapsed, attempt, cancelled=True)
                )

    # ─── Terminal reporting ───

    def _finish(self, outcome: MonitorOutcome) -> MonitorOutcome:
        total = int(outcome.elapsed_seconds)
        meta = f"attempts={outcome.attempts_used}/{self.poll_policy.max_attempts}"

        if outcome.restored:
            banner(
                self.logger,
                "🎉 Internet connection restored!",
                f"Total wait time: {total} seconds",
            )
            tlog(self.logger, "✅", "MONITOR", outcome.state, f"{total}s", meta)
            self._notify(Notification(
                title="🌐 Internet Connection Restored!",
                body=f"Modem restart completed.\nWait time: {total} seconds",
                urgency="normal",
            ))
        elif outcome.cancelled:
            tlog(self.logger, "⏹️", "MONITOR", outcome.state, f"{total}s", meta,
                 level=logging.WARNING)
        else:
            banner(
                self.logger,
                f"⚠️ Internet connection not restored after {total} seconds!",
                "Please check the modem manually.",
                level=logging.ERROR,
            )
            tlog(self.logger, "❌", "MONITOR", outcome.state, f"{total}s", meta,
                 level=logging.ERROR)
            self._notify(Notification(
                title="⚠️ No Internet Connection!",
                body=(
                    f"Waited {total} seconds but internet did not come back.\n"
                    "Please check the modem!"
                ),
                urgency="critical",
            ))

        return outcome

    def _notify(self, note: Notification) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.send(note)
        except Exception as e:
            self.logger.warning(f"Notification dispatch failed: {e}")

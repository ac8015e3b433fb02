# ─── Future imports ───
from __future__ import annotations

# ─── Standard library imports ───
from enum import Enum
from dataclasses import dataclass

# ─── Project imports ───
from .config import Config, DEFAULT_TEST_URLS


class ProbeKind(Enum):
    """
    Liveness mechanisms, listed cheapest/most-reliable first.

    • PING : ICMP echo to a fixed address, bypasses DNS entirely
    • DNS  : system resolver lookup of a well-known hostname
    • HTTP : GET against well-known endpoints (last resort)
    """
    PING = "ping"
    DNS = "dns"
    HTTP = "http"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return {
            ProbeKind.PING: "Reachability",
            ProbeKind.DNS: "NameResolution",
            ProbeKind.HTTP: "Endpoint",
        }[self]


@dataclass(frozen=True)
class ProbeConfig:
    """
    Which probes run, in what order, against which targets.

    Built once at startup and shared read-only with the monitor.
    """

    order: tuple[ProbeKind, ...] = (ProbeKind.PING, ProbeKind.DNS, ProbeKind.HTTP)

    ping_host: str = "8.8.8.8"
    dns_hostname: str = "google.com"
    test_urls: tuple[str, ...] = DEFAULT_TEST_URLS

    # ─── Per-probe ceilings (seconds) ───
    ping_timeout_s: float = 2.0
    dns_timeout_s: float = 5.0
    http_timeout_s: float = 5.0

    def __post_init__(self) -> None:
        # Lists from callers are frozen into tuples
        object.__setattr__(self, "order", tuple(ProbeKind(k) for k in self.order))
        object.__setattr__(self, "test_urls", tuple(self.test_urls))

        if not self.order:
            raise ValueError("Probe order must name at least one probe")
        if len(set(self.order)) != len(self.order):
            raise ValueError(f"Probe order contains duplicates: {self.order}")

        for name in ("ping_timeout_s", "dns_timeout_s", "http_timeout_s"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

        if ProbeKind.PING in self.order and not self.ping_host:
            raise ValueError("Reachability probe enabled without a ping host")
        if ProbeKind.DNS in self.order and not self.dns_hostname:
            raise ValueError("Name-resolution probe enabled without a hostname")
        if ProbeKind.HTTP in self.order and not self.test_urls:
            raise ValueError("Endpoint probe enabled without any test URLs")

    @property
    def worst_case_s(self) -> float:
        """Upper bound of one check_internet() call when every probe fails."""
        total = 0.0
        for kind in self.order:
            if kind is ProbeKind.PING:
                total += self.ping_timeout_s
            elif kind is ProbeKind.DNS:
                total += self.dns_timeout_s
            else:
                total += self.http_timeout_s * len(self.test_urls)
        return total

    @classmethod
    def from_config(cls) -> ProbeConfig:
        return cls(
            order=Config.PROBE_ORDER,
            ping_host=Config.PING_HOST,
            dns_hostname=Config.DNS_HOSTNAME,
            test_urls=Config.TEST_URLS,
            ping_timeout_s=Config.PING_TIMEOUT,
            dns_timeout_s=Config.DNS_TIMEOUT,
            http_timeout_s=Config.HTTP_TIMEOUT,
        )


@dataclass(frozen=True)
class PollPolicy:
    """
    Fixed-interval poll schedule for post-restart confirmation.

    A fixed interval (no backoff) fits an appliance that boots on a
    roughly known timescale of 1-2 minutes.
    """

    check_interval_s: float = 5.0
    max_attempts: int = 60

    def __post_init__(self) -> None:
        if self.check_interval_s < 0:
            raise ValueError(
                f"check_interval_s must be >= 0, got {self.check_interval_s}"
            )
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    @property
    def time_budget_s(self) -> float:
        """Upper bound of sleep time across a full run (probe time excluded)."""
        return self.check_interval_s * self.max_attempts

    def summary(self) -> dict[str, int | float]:
        return {
            "check_interval_s": self.check_interval_s,
            "max_attempts": self.max_attempts,
            "time_budget_s": self.time_budget_s,
        }

    @classmethod
    def from_config(cls) -> PollPolicy:
        return cls(
            check_interval_s=Config.CHECK_INTERVAL_MS / 1000,
            max_attempts=Config.MAX_ATTEMPTS,
        )

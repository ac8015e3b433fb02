# --- Standard library imports ---
import math
import socket
import threading
import subprocess
from dataclasses import dataclass

# --- Third-party imports ---
import requests

# --- Project imports ---
from .logger import get_logger
from .policy import ProbeConfig, ProbeKind


logger = get_logger("probes")

# Extra time granted to the ping process on top of its own -W wait
PING_SLACK_S = 1.0


class DeadlineExceeded(TimeoutError):
    """A blocking call outlived its deadline and was abandoned."""


def call_with_deadline(func, timeout_s: float, *args, name: str = "deadline-call", **kwargs):
    """
    Run `func(*args, **kwargs)` on a daemon thread and wait at most
    `timeout_s` seconds for it.

    Used for calls with no overall timeout of their own (getaddrinfo,
    a full HTTP exchange). An abandoned call keeps running in the
    background, but as a daemon thread it never holds up interpreter
    exit and whatever it acquires is released when it finishes.

    Raises:
        DeadlineExceeded: the call did not finish in time.
        Any exception raised by `func` itself.
    """
    outcome = {}

    def worker():
        try:
            outcome["value"] = func(*args, **kwargs)
        except Exception as e:
            outcome["error"] = e

    thread = threading.Thread(target=worker, name=name, daemon=True)
    thread.start()
    thread.join(timeout_s)

    if thread.is_alive():
        raise DeadlineExceeded(f"{name} exceeded {timeout_s}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of one check_internet() evaluation.

    `strategy` names the probe that answered positively, or None when
    every configured probe reported the network as unreachable.
    """
    reachable: bool
    strategy: ProbeKind | None
    latency_s: float


class ProbeStrategy:
    """
    One self-contained liveness test.

    Subclasses implement `check()`; it must return a bool within its
    timeout and must never raise for transport-level failures.
    """

    kind: ProbeKind

    def __init__(self, timeout_s: float):
        self.timeout_s = timeout_s

    def check(self) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout_s={self.timeout_s})"


class ReachabilityProbe(ProbeStrategy):
    """ICMP echo via the system `ping` binary: one packet, short wait."""

    kind = ProbeKind.PING

    def __init__(self, host: str = "8.8.8.8", timeout_s: float = 2.0):
        super().__init__(timeout_s)
        self.host = host

    def command(self) -> list[str]:
        wait = max(1, math.ceil(self.timeout_s))
        return ["ping", "-c", "1", "-W", str(wait), self.host]

    def check(self) -> bool:
        try:
            # subprocess.run kills the child when the ceiling is hit
            result = subprocess.run(
                self.command(),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout_s + PING_SLACK_S,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"Ping {self.host} timed out; process killed")
            return False
        except OSError as e:
            # ping missing or not permitted (sandboxed environments)
            logger.debug(f"Ping {self.host} unavailable ({e.__class__.__name__})")
            return False

        if result.returncode != 0:
            logger.debug(f"Ping {self.host} failed (exit {result.returncode})")
        return result.returncode == 0


class NameResolutionProbe(ProbeStrategy):
    """
    Resolve a well-known hostname through the system resolver.

    getaddrinfo() has no timeout of its own, so the lookup runs under
    call_with_deadline() and is abandoned once the deadline passes.
    """

    kind = ProbeKind.DNS

    def __init__(self, hostname: str = "google.com", timeout_s: float = 5.0):
        super().__init__(timeout_s)
        self.hostname = hostname

    def check(self) -> bool:
        try:
            answer = call_with_deadline(
                socket.getaddrinfo, self.timeout_s, self.hostname, None,
                name="dns-lookup",
            )
            return bool(answer)
        except DeadlineExceeded:
            logger.debug(
                f"DNS lookup for {self.hostname} exceeded {self.timeout_s}s; abandoned"
            )
            return False
        except (OSError, UnicodeError) as e:
            logger.debug(f"DNS lookup for {self.hostname} failed ({e.__class__.__name__})")
            return False


class EndpointProbe(ProbeStrategy):
    """
    HTTP(S) GET against an ordered list of well-known URLs.

    Succeeds on the first URL answering with a status in [200, 400).
    Redirects are not followed; a 3xx already proves the path is up.

    The requests timeout only bounds connect and each socket read, not
    the hostname lookup or a slow trickle of headers, so every GET also
    runs under an overall deadline of `timeout_s`.
    """

    kind = ProbeKind.HTTP

    def __init__(self, urls: tuple[str, ...], timeout_s: float = 5.0):
        super().__init__(timeout_s)
        self.urls = tuple(urls)

    def fetch_status(self, url: str) -> int:
        with requests.get(
            url,
            timeout=self.timeout_s,
            allow_redirects=False,
            stream=True,
        ) as resp:
            return resp.status_code

    def check_url(self, url: str) -> bool:
        try:
            status = call_with_deadline(
                self.fetch_status, self.timeout_s, url, name="http-get",
            )
        except DeadlineExceeded:
            logger.debug(f"GET {url} exceeded {self.timeout_s}s; abandoned")
            return False
        except requests.RequestException as e:
            logger.debug(f"GET {url} failed ({e.__class__.__name__})")
            return False

        ok = 200 <= status < 400
        if not ok:
            logger.debug(f"GET {url} returned HTTP {status}")
        return ok

    def check(self) -> bool:
        for url in self.urls:
            if self.check_url(url):
                return True
        return False


def build_strategies(config: ProbeConfig) -> list[ProbeStrategy]:
    """Instantiate the configured probes in priority order."""
    factories = {
        ProbeKind.PING: lambda: ReachabilityProbe(config.ping_host, config.ping_timeout_s),
        ProbeKind.DNS: lambda: NameResolutionProbe(config.dns_hostname, config.dns_timeout_s),
        ProbeKind.HTTP: lambda: EndpointProbe(config.test_urls, config.http_timeout_s),
    }
    return [factories[kind]() for kind in config.order]

import pytest
from unittest.mock import patch

from modem_recovery.policy import ProbeConfig, PollPolicy, ProbeKind


# ===============================
# TEST GROUP: Probe Configuration
# ===============================
# Class: ProbeConfig
# ------------------
def test_probe_config_defaults():
    """Defaults probe ping → dns → http against well-known targets"""
    config = ProbeConfig()

    assert config.order == (ProbeKind.PING, ProbeKind.DNS, ProbeKind.HTTP)
    assert config.ping_host == "8.8.8.8"
    assert config.dns_hostname == "google.com"
    assert len(config.test_urls) == 3

def test_probe_config_accepts_string_kinds():
    """Probe order from the environment arrives as plain strings"""
    config = ProbeConfig(order=["dns", "http"], test_urls=["https://a.example"])

    assert config.order == (ProbeKind.DNS, ProbeKind.HTTP)
    assert config.test_urls == ("https://a.example",)

@pytest.mark.parametrize(
    "kwargs",
    [
        # ❌ Nothing to probe
        {"order": ()},

        # ❌ Unknown probe kind
        {"order": ("ping", "smoke-signal")},

        # ❌ Duplicate probe kind
        {"order": ("ping", "ping")},

        # ❌ Non-positive timeouts
        {"ping_timeout_s": 0},
        {"dns_timeout_s": -1},
        {"http_timeout_s": 0},

        # ❌ Enabled probe without a target
        {"ping_host": ""},
        {"dns_hostname": ""},
        {"test_urls": ()},
    ],
)
def test_probe_config_rejects_invalid(kwargs):
    """Malformed probe configuration fails at construction time"""
    with pytest.raises(ValueError):
        ProbeConfig(**kwargs)

def test_probe_config_target_only_required_when_enabled():
    """An empty URL list is fine when the endpoint probe is not used"""
    config = ProbeConfig(order=("ping",), test_urls=())

    assert config.order == (ProbeKind.PING,)

def test_probe_config_is_immutable():
    config = ProbeConfig()

    with pytest.raises(AttributeError):
        config.ping_host = "1.1.1.1"

def test_probe_config_worst_case():
    """Worst case sums every ceiling, one HTTP timeout per URL"""
    config = ProbeConfig(ping_timeout_s=2, dns_timeout_s=5, http_timeout_s=5)

    assert config.worst_case_s == 2 + 5 + 3 * 5

def test_probe_config_from_config():
    class MockConfig:
        PROBE_ORDER = ("http", "ping")
        PING_HOST = "1.1.1.1"
        DNS_HOSTNAME = "example.com"
        TEST_URLS = ("https://example.com",)
        PING_TIMEOUT = 1.0
        DNS_TIMEOUT = 2.0
        HTTP_TIMEOUT = 3.0

    with patch("modem_recovery.policy.Config", MockConfig):
        config = ProbeConfig.from_config()

    assert config.order == (ProbeKind.HTTP, ProbeKind.PING)
    assert config.ping_host == "1.1.1.1"
    assert config.http_timeout_s == 3.0


# ==========================
# TEST GROUP: Poll Policy
# ==========================
# Class: PollPolicy
# -----------------
@pytest.mark.parametrize(
    "interval, attempts, expected_budget",
    [
        # ✅ Five minute ceiling
        (5.0, 60, 300.0),

        # ✅ Test mode: no sleeping between checks
        (0.0, 3, 0.0),
    ],
)
def test_poll_policy_budget(interval, attempts, expected_budget):
    policy = PollPolicy(check_interval_s=interval, max_attempts=attempts)

    assert policy.time_budget_s == expected_budget
    assert policy.summary()["time_budget_s"] == expected_budget

@pytest.mark.parametrize(
    "interval, attempts",
    [
        # ❌ Negative interval
        (-1.0, 5),

        # ❌ No attempts at all
        (5.0, 0),
        (5.0, -3),
    ],
)
def test_poll_policy_rejects_invalid(interval, attempts):
    with pytest.raises(ValueError):
        PollPolicy(check_interval_s=interval, max_attempts=attempts)

def test_poll_policy_from_config_converts_ms():
    class MockConfig:
        CHECK_INTERVAL_MS = 2500
        MAX_ATTEMPTS = 12

    with patch("modem_recovery.policy.Config", MockConfig):
        policy = PollPolicy.from_config()

    assert policy.check_interval_s == 2.5
    assert policy.max_attempts == 12

import pytest
import requests
import responses
from unittest.mock import patch

from modem_recovery.restart import SmartPlugRestartDriver


PLUG_IP = "2.2.2.2"


# ========
# FIXTURES
# ========
@pytest.fixture(autouse=True)
def patch_sleep():
    """Bypass the power-off hold time for all tests in this module"""
    with patch("modem_recovery.restart.time.sleep", return_value=None) as mock_sleep:
        yield mock_sleep

@pytest.fixture
def driver():
    return SmartPlugRestartDriver(plug_ip=PLUG_IP, reboot_delay=7, timeout=3)


# ============================
# TEST GROUP: Smart Plug Cycle
# ============================
# Method: restart()
# -----------------
@pytest.mark.parametrize(
    "status_plug_off, status_plug_on, expected_result",
    [
        # ✅ Both relay endpoints respond OK (200)
        (200, 200, True),

        # ❌ OFF relay fails (500)
        (500, 200, False),

        # ❌ ON relay fails (500)
        (200, 500, False),

        # ❌ Both relay endpoints fail (500/500)
        (500, 500, False),
    ],
)
@responses.activate
def test_restart(driver, status_plug_off, status_plug_on, expected_result):
    """Restart succeeds only when both relay commands are accepted"""
    responses.add(responses.GET, f"http://{PLUG_IP}/relay/0?turn=off", status=status_plug_off)
    responses.add(responses.GET, f"http://{PLUG_IP}/relay/0?turn=on", status=status_plug_on)

    assert driver.restart() is expected_result

@responses.activate
def test_restart_holds_power_off(driver, patch_sleep):
    responses.add(responses.GET, f"http://{PLUG_IP}/relay/0?turn=off", status=200)
    responses.add(responses.GET, f"http://{PLUG_IP}/relay/0?turn=on", status=200)

    driver.restart()

    patch_sleep.assert_called_once_with(7)
    assert [c.request.url for c in responses.calls] == [
        f"http://{PLUG_IP}/relay/0?turn=off",
        f"http://{PLUG_IP}/relay/0?turn=on",
    ]

@patch("modem_recovery.restart.requests.get", side_effect=requests.exceptions.ConnectionError("Boom"))
def test_restart_plug_unreachable(mock_get, driver):
    """Simulate network failure during relay calls"""
    assert driver.restart() is False
    assert mock_get.call_count == 1

def test_restart_without_plug_ip():
    with patch("modem_recovery.restart.Config.Hardware.PLUG_IP", None), \
         patch("modem_recovery.restart.requests.get") as mock_get:
        assert SmartPlugRestartDriver().restart() is False

    mock_get.assert_not_called()

from unittest.mock import MagicMock

import pytest

from deployment.constants import ERC1967_PROXY
from deployment.verification import verify_safe, wait_for_explorer
from deployment.vmahout import verify_deployment
from tests.conftest import IMPLEMENTATION, PROXY


def test_verify_safe_success(capsys):
    toolkit = MagicMock()
    assert verify_safe(toolkit, PROXY, contract=ERC1967_PROXY) is True
    toolkit.verify.assert_called_once_with(PROXY, contract=ERC1967_PROXY)
    assert "WARNING" not in capsys.readouterr().out


@pytest.mark.parametrize(
    "error",
    [
        ValueError("Contract source code already verified"),
        RuntimeError("Unable to verify"),
        KeyError("ETHERSCAN_API_KEY"),
    ],
)
def test_verify_safe_swallows_errors(capsys, error):
    toolkit = MagicMock()
    toolkit.verify.side_effect = error

    assert verify_safe(toolkit, IMPLEMENTATION) is False

    output = capsys.readouterr().out
    assert f"WARNING: Verification skipped/failed for {IMPLEMENTATION}: {error}" in output


def test_verify_safe_does_not_swallow_interrupts():
    toolkit = MagicMock()
    toolkit.verify.side_effect = KeyboardInterrupt
    with pytest.raises(KeyboardInterrupt):
        verify_safe(toolkit, IMPLEMENTATION)


def test_wait_for_explorer(sleeps, capsys):
    wait_for_explorer(42, "deployment")
    assert sleeps == [42]
    output = capsys.readouterr().out
    assert "Waiting 42 seconds before verification so explorer can index the deployment" in output


def test_verify_deployment_reports_results(toolkit):
    toolkit.verify.side_effect = [None, ValueError("Already Verified")]

    result = verify_deployment(toolkit, PROXY)

    assert result == (True, False)
    assert toolkit.verify.call_count == 2


def test_verify_deployment_lookup_failure_propagates(toolkit):
    toolkit.get_implementation_address.side_effect = ValueError("No implementation found")
    with pytest.raises(ValueError):
        verify_deployment(toolkit, PROXY)
    toolkit.verify.assert_not_called()

"""Tests for the interface fallback negotiator."""

from unittest.mock import Mock, call

import pytest

from ipmiserver.ipmi.exceptions import NO_CONNECTION_MESSAGE
from ipmiserver.ipmi.models import IPMI_INTERFACES
from ipmiserver.ipmi.negotiation import negotiate


def _operation(*successes: bool) -> Mock:
    """Operation whose k-th call returns ("result-k", successes[k])."""
    return Mock(side_effect=[(f"result-{i + 1}", ok) for i, ok in enumerate(successes)])


class TestNegotiate:
    """Tests for negotiate."""

    def test_interfaces_in_fixed_order(self):
        """Default order is lanplus, lan, imb, open."""
        assert IPMI_INTERFACES == ("lanplus", "lan", "imb", "open")

    def test_first_success_wins(self):
        """Stops at the first interface that works."""
        operation = _operation(True, True, True, True)

        outcome = negotiate(operation)

        assert outcome.success is True
        assert outcome.interface == "lanplus"
        assert outcome.value == "result-1"
        assert operation.call_count == 1

    @pytest.mark.parametrize("k", [1, 2, 3, 4])
    def test_kth_attempt_succeeds(self, k):
        """With attempt k the first success, exactly k calls happen."""
        operation = _operation(*([False] * (k - 1) + [True] + [True] * (4 - k)))

        outcome = negotiate(operation)

        assert operation.call_count == k
        assert outcome.success is True
        assert outcome.value == f"result-{k}"
        assert outcome.interface == IPMI_INTERFACES[k - 1]
        assert outcome.message is None

    def test_calls_each_interface_in_order(self):
        """Each call receives the next interface name."""
        operation = _operation(False, False, True)

        negotiate(operation)

        assert operation.call_args_list == [call("lanplus"), call("lan"), call("imb")]

    def test_none_succeed(self):
        """All failing: every interface tried once, last outcome with a generic message."""
        operation = _operation(False, False, False, False)

        outcome = negotiate(operation)

        assert operation.call_count == 4
        assert outcome.success is False
        assert outcome.value == "result-4"
        assert outcome.interface == "open"
        assert outcome.message == NO_CONNECTION_MESSAGE

    def test_pinned_failure_single_call(self):
        """A pinned interface is tried exactly once, even when it fails."""
        operation = _operation(False, True)

        outcome = negotiate(operation, pinned="lan")

        operation.assert_called_once_with("lan")
        assert outcome.success is False
        assert outcome.interface == "lan"
        assert outcome.message is None

    def test_pinned_success_single_call(self):
        """A working pinned interface returns its result."""
        operation = _operation(True)

        outcome = negotiate(operation, pinned="open")

        operation.assert_called_once_with("open")
        assert outcome.success is True
        assert outcome.value == "result-1"

    def test_custom_interface_list(self):
        """The fallback list can be replaced."""
        operation = _operation(False, True)

        outcome = negotiate(operation, interfaces=["lan", "lanplus"])

        assert outcome.interface == "lanplus"
        assert operation.call_args_list == [call("lan"), call("lanplus")]

    def test_empty_interface_list_rejected(self):
        """An empty fallback list is a programming error."""
        with pytest.raises(ValueError):
            negotiate(_operation(), interfaces=[])

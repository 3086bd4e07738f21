"""Tests for the IPMI exception hierarchy and response models."""

from ipmiserver.ipmi.exceptions import InvocationError, IpmiError, MalformedOutputError
from ipmiserver.ipmi.models import DeviceInfoResult, ExecutionResult


class TestExceptionHierarchy:
    """Test exception inheritance and structure."""

    def test_ipmi_error_inherits_from_exception(self):
        """IpmiError should inherit from Exception."""
        assert issubclass(IpmiError, Exception)
        assert str(IpmiError("test")) == "test"

    def test_invocation_error(self):
        """InvocationError keeps the command line and exit status."""
        exc = InvocationError("failed", command="ipmitool -H h", returncode=1)
        assert isinstance(exc, IpmiError)
        assert str(exc) == "failed"
        assert exc.command == "ipmitool -H h"
        assert exc.returncode == 1

    def test_invocation_error_defaults(self):
        exc = InvocationError("failed")
        assert exc.command == ""
        assert exc.returncode is None

    def test_malformed_output_error(self):
        """MalformedOutputError keeps the offending line."""
        exc = MalformedOutputError("too short", line="a | b")
        assert isinstance(exc, IpmiError)
        assert exc.line == "a | b"


class TestResponseModels:
    """Test JSON shaping of results."""

    def test_as_json_drops_unset_top_level_fields(self):
        result = DeviceInfoResult(success=False, message="nope", debug="")
        assert result.as_json() == {"success": False, "message": "nope", "debug": ""}

    def test_as_json_keeps_null_states(self):
        """Null sensor values inside states are preserved."""
        result = DeviceInfoResult(success=True, device={}, power_on=False, states={"fan1": None}, debug="")
        assert result.as_json()["states"] == {"fan1": None}

    def test_execution_result_defaults(self):
        result = ExecutionResult(success=True)
        assert result.output == ""
        assert result.message is None

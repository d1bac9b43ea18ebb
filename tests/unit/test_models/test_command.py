"""
Unit tests for invocation models and input validators.
"""

import pytest

from dockcli.models import CommandSpec, ExecutionResult
from dockcli.validation import (
    ValidationError,
    log_level_number,
    validate_bool,
    validate_enum_choice,
    validate_executable,
    validate_positive_float,
)


@pytest.mark.unit
class TestCommandSpec:
    """Test cases for CommandSpec construction."""

    def test_arguments_kept_verbatim(self):
        """Empty strings and spaces are passed through untouched."""
        spec = CommandSpec("docker", ["run", "", "--name", "my container"])

        assert spec.args == ("run", "", "--name", "my container")
        assert spec.argv == ["docker", "run", "", "--name", "my container"]

    def test_of_constructor(self):
        spec = CommandSpec.of("docker", "ps", "-a")

        assert spec.executable == "docker"
        assert spec.args == ("ps", "-a")

    def test_empty_executable_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            CommandSpec("", ("ps",))

        assert exc_info.value.field_name == "executable"

    def test_repeated_executable_rejected(self):
        """The executable must not be duplicated as the first argument."""
        with pytest.raises(ValidationError) as exc_info:
            CommandSpec("docker", ("docker", "ps"))

        assert exc_info.value.field_name == "args"

    def test_non_string_argument_rejected(self):
        with pytest.raises(ValidationError):
            CommandSpec("docker", ("stop", 5))

    def test_with_args_keeps_executable(self):
        spec = CommandSpec.of("/usr/local/bin/docker", "ps").with_args(["logs", "web"])

        assert spec.argv == ["/usr/local/bin/docker", "logs", "web"]

    def test_str_is_shell_quoted(self):
        spec = CommandSpec.of("docker", "run", "-e", "GREETING=hello world")

        assert str(spec) == "docker run -e 'GREETING=hello world'"

    def test_spec_is_immutable(self):
        spec = CommandSpec.of("docker", "ps")

        with pytest.raises(AttributeError):
            spec.executable = "podman"


@pytest.mark.unit
class TestExecutionResult:

    def test_success_and_lines(self):
        result = ExecutionResult(CommandSpec.of("docker", "ps"), 0, "a\nb\n", "", 0.1)

        assert result.succeeded is True
        assert result.stdout_lines() == ["a", "b"]

    def test_failure(self):
        result = ExecutionResult(CommandSpec.of("docker", "ps"), 125, "", "boom", 0.1)

        assert result.succeeded is False


@pytest.mark.unit
class TestValidators:
    """Test cases for the shared input validators."""

    def test_positive_float_accepts_int(self):
        assert validate_positive_float(5, field_name="timeout") == 5.0

    def test_positive_float_exclusive_min(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_float(0, field_name="timeout", exclusive_min=True)

        assert "timeout" in str(exc_info.value)

    def test_positive_float_max(self):
        with pytest.raises(ValidationError):
            validate_positive_float(61, max_value=60)

    @pytest.mark.parametrize("value", [True, "abc", None])
    def test_positive_float_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError):
            validate_positive_float(value)

    def test_enum_choice_case_insensitive(self):
        assert validate_enum_choice("Fail", ["wait", "fail"], case_sensitive=False) == "fail"

    def test_enum_choice_rejects_unknown(self):
        with pytest.raises(ValidationError):
            validate_enum_choice("never", ["wait", "fail"])

    def test_bool_rejects_strings(self):
        assert validate_bool(False) is False
        with pytest.raises(ValidationError):
            validate_bool("true")

    @pytest.mark.parametrize("value", ["", "   ", " docker", None])
    def test_executable_rejects_blank_values(self, value):
        with pytest.raises(ValidationError):
            validate_executable(value)

    def test_log_level_number(self):
        assert log_level_number("debug") == 10
        with pytest.raises(ValidationError):
            log_level_number("verbose")

"""Tests for the passpolicy CLI."""

import json

import pytest
from click.testing import CliRunner

from passpolicy.cli import main

CLEAN_ENV = {
    "PASSPOLICY_POLICY_FILE": None,
    "PASSPOLICY_COMMON_PASSWORDS_FILE": None,
    "PASSPOLICY_LOG_LEVEL": "WARNING",
    "PASSPOLICY_LOG_JSON": "1",
}


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, args, **kwargs):
    return runner.invoke(main, args, env=CLEAN_ENV, **kwargs)


def last_json_line(output: str) -> dict:
    return json.loads(output.strip().splitlines()[-1])


class TestCheck:
    def test_failing_candidate_json(self, runner):
        result = invoke(
            runner, ["check", "--require-number", "--require-symbol", "--json", "longenough"]
        )
        assert result.exit_code == 1
        assert last_json_line(result.output) == {
            "passed": False,
            "violations": ["MissingDigit", "MissingSymbol"],
        }

    def test_passing_candidate(self, runner):
        result = invoke(runner, ["check", "--require-number", "--require-symbol", "Abc!efg1"])
        assert result.exit_code == 0
        assert "satisfies" in result.output

    def test_table_output_lists_codes(self, runner):
        result = invoke(runner, ["check", "--max-repeats", "2", "aaab"])
        assert result.exit_code == 1
        assert "TooShort" in result.output
        assert "RepeatedCharacters" in result.output

    def test_prompts_when_password_omitted(self, runner):
        result = invoke(runner, ["check", "--json"], input="short\n")
        assert result.exit_code == 1
        assert "short" not in result.output.replace("TooShort", "")
        assert last_json_line(result.output)["violations"] == ["TooShort"]

    def test_policy_file(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"minimum_character_length": "12", "max_sequence": "3"}))
        result = invoke(runner, ["check", "--policy", str(path), "--json", "abcdefghijkl"])
        assert result.exit_code == 1
        assert last_json_line(result.output)["violations"] == ["SequenceDetected"]

    def test_options_override_policy_file(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"minimum_character_length": "12"}))
        result = invoke(
            runner, ["check", "--policy", str(path), "--min-length", "4", "--json", "abcdef"]
        )
        assert result.exit_code == 0
        assert last_json_line(result.output)["passed"] is True

    def test_policy_from_environment(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"disallow_common_passwords": "yes"}))
        result = runner.invoke(
            main,
            ["check", "--json", "password"],
            env={**CLEAN_ENV, "PASSPOLICY_POLICY_FILE": str(path)},
        )
        assert result.exit_code == 1
        assert last_json_line(result.output)["violations"] == ["CommonPassword"]

    def test_common_passwords_file(self, runner, tmp_path):
        path = tmp_path / "common.txt"
        path.write_text("Tr0ub4dor&3\n")
        result = invoke(
            runner,
            ["check", "--disallow-common", "--common-passwords", str(path), "--json", "tr0ub4dor&3"],
        )
        assert result.exit_code == 1
        assert last_json_line(result.output)["violations"] == ["CommonPassword"]

    def test_malformed_policy_file_is_usage_error(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"require_symbol_characters": "sometimes"}))
        result = invoke(runner, ["check", "--policy", str(path), "anything"])
        assert result.exit_code == 2
        assert "require_symbol_characters" in result.output

    def test_min_length_override_clamped_to_maximum(self, runner):
        result = invoke(runner, ["check", "--min-length", "1000", "--json", "x" * 255])
        assert result.exit_code == 0
        assert last_json_line(result.output)["passed"] is True

    def test_min_length_override_clamped_to_minimum(self, runner):
        result = invoke(runner, ["check", "--min-length", "1", "--json", "ab"])
        assert result.exit_code == 1
        assert last_json_line(result.output)["violations"] == ["TooShort"]

    def test_negated_flag_turns_rule_off(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"require_symbol_characters": "yes"}))
        result = invoke(
            runner, ["check", "--policy", str(path), "--no-require-symbol", "--json", "Abcdefg1"]
        )
        assert result.exit_code == 0
        assert last_json_line(result.output)["passed"] is True

    def test_allow_common_overrides_environment_policy(self, runner, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"disallow_common_passwords": "yes"}))
        result = runner.invoke(
            main,
            ["check", "--allow-common", "--json", "password"],
            env={**CLEAN_ENV, "PASSPOLICY_POLICY_FILE": str(path)},
        )
        assert result.exit_code == 0


class TestConfigErrors:
    def test_missing_policy_file_from_environment(self, runner, tmp_path):
        result = runner.invoke(
            main,
            ["check", "anything"],
            env={**CLEAN_ENV, "PASSPOLICY_POLICY_FILE": str(tmp_path / "gone.json")},
        )
        assert result.exit_code == 2
        assert "cannot read policy file" in result.output

    def test_common_passwords_option_not_utf8(self, runner, tmp_path):
        path = tmp_path / "common.txt"
        path.write_bytes(b"\xff\xfe\xfd\n")
        result = invoke(
            runner, ["check", "--disallow-common", "--common-passwords", str(path), "anything"]
        )
        assert result.exit_code == 2

    def test_common_passwords_from_environment_not_utf8(self, runner, tmp_path):
        path = tmp_path / "common.txt"
        path.write_bytes(b"\xff\xfe\xfd\n")
        result = runner.invoke(
            main,
            ["check", "anything"],
            env={**CLEAN_ENV, "PASSPOLICY_COMMON_PASSWORDS_FILE": str(path)},
        )
        assert result.exit_code == 2

    def test_bad_port_in_environment(self, runner):
        result = runner.invoke(
            main, ["check", "anything"], env={**CLEAN_ENV, "PASSPOLICY_PORT": "abc"}
        )
        assert result.exit_code == 2
        assert "PASSPOLICY_PORT" in result.output


class TestPolicyCommand:
    def test_shows_settings_and_checklist(self, runner):
        result = invoke(runner, ["policy"])
        assert result.exit_code == 0
        assert "minimum_character_length" in result.output
        assert "At least 8 characters" in result.output


def test_version(runner):
    result = invoke(runner, ["version"])
    assert result.exit_code == 0
    assert "passpolicy 0.1.0" in result.output

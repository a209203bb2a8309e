"""Tests for the reply → Finding parser."""

from __future__ import annotations

import pytest

from llmcheck.constants import Severity
from llmcheck.reconcile.findings import (
    Finding,
    classify_severity,
    detect_rule_tag,
    extract_identifier,
    extract_line_number,
    last_paren_content,
    parse_reply,
)

REPLY = """\
[ERROR] (6) (2.3.1) (Constant 'maxSize' should be UPPER_SNAKE_CASE)

[WARN] (8) (2.3.2) (Field 'Count' should be lowerCamelCase)
Consider splitting this class (4)
[violation] (10) (2.4.1) (Parameter 'Value' should be lowerCamelCase)
"""


# ── classify_severity ────────────────────────────────────────


class TestClassifySeverity:
    @pytest.mark.parametrize(
        "line",
        ["[ERROR] x", "[error] x", "[Violation] x", "[VIOLATION] x"],
    )
    def test_error_prefixes(self, line: str) -> None:
        assert classify_severity(line) == Severity.ERROR

    @pytest.mark.parametrize("line", ["[WARN] x", "[warning] x", "[Warning] x"])
    def test_warning_prefixes(self, line: str) -> None:
        assert classify_severity(line) == Severity.WARNING

    def test_unlabeled_is_info(self) -> None:
        assert classify_severity("Looks fine overall") == Severity.INFO

    def test_prefix_must_lead(self) -> None:
        assert classify_severity("note: [ERROR] inside") == Severity.INFO


# ── field extraction ─────────────────────────────────────────


class TestExtractLineNumber:
    def test_bare_number_in_parens(self) -> None:
        assert extract_line_number("[ERROR] (42) bad name") == 42

    def test_line_label_in_parens(self) -> None:
        assert extract_line_number("bad name (2.2.1) (line 10)") == 10

    def test_first_reference_wins(self) -> None:
        assert extract_line_number("(3) then (7)") == 3

    def test_section_code_is_not_a_line(self) -> None:
        assert extract_line_number("bad name (2.2.1)") is None

    def test_absent(self) -> None:
        assert extract_line_number("no numbers here") is None


class TestLastParenContent:
    def test_rightmost_pair(self) -> None:
        assert last_paren_content("a (b) (c d)") == "c d"

    def test_trims(self) -> None:
        assert last_paren_content("x (  spaced  )") == "spaced"

    def test_no_close_paren(self) -> None:
        assert last_paren_content("open ( only") is None

    def test_close_before_open(self) -> None:
        assert last_paren_content(") then (") is None


class TestDetectRuleTag:
    def test_known_code(self) -> None:
        assert detect_rule_tag("(2.2.1) bad") == "MethodName"

    def test_first_known_code_wins(self) -> None:
        assert detect_rule_tag("(9.9.9) (1.1.2) (2.1.1)") == "JavadocRequired"

    def test_unknown_code(self) -> None:
        assert detect_rule_tag("(9.9.9)") is None

    def test_code_outside_parens_ignored(self) -> None:
        assert detect_rule_tag("see 2.2.1") is None


class TestExtractIdentifier:
    def test_quoted_identifier_preferred(self) -> None:
        assert extract_identifier("Name 'doStuff' is not camelCase") == "doStuff"

    def test_quoted_non_identifier_skipped(self) -> None:
        assert extract_identifier("use '/**' for 'fooBar'") == "fooBar"

    def test_fallback_takes_last_bare_word(self) -> None:
        # Known false-positive source: the last word of the prose wins,
        # even when an earlier word is the real identifier.
        assert extract_identifier("doStuff is not camelCase") == "camelCase"

    def test_no_identifier(self) -> None:
        assert extract_identifier("42 / 7") is None


# ── parse_reply ──────────────────────────────────────────────


class TestParseReply:
    def test_blank_lines_dropped_and_order_kept(self) -> None:
        findings = parse_reply(REPLY)
        assert [f.target_line for f in findings] == [6, 8, 4, 10]
        assert [f.severity for f in findings] == [
            Severity.ERROR,
            Severity.WARNING,
            Severity.INFO,
            Severity.ERROR,
        ]

    def test_warnings_disabled_keeps_only_errors(self) -> None:
        findings = parse_reply(REPLY, show_warnings=False)
        assert [f.severity for f in findings] == [Severity.ERROR, Severity.ERROR]

    def test_warn_line_never_visible_without_warnings(self) -> None:
        assert parse_reply("[warn] (3) (2.2.1) ('x')", show_warnings=False) == []

    def test_error_line_visible_regardless_of_flag(self) -> None:
        for flag in (True, False):
            assert len(parse_reply("[error] (3) bad", show_warnings=flag)) == 1

    def test_any_line_break_style(self) -> None:
        findings = parse_reply("[ERROR] (1) a\r\n[ERROR] (2) b\r[ERROR] (3) c")
        assert [f.target_line for f in findings] == [1, 2, 3]

    def test_lines_are_trimmed(self) -> None:
        (finding,) = parse_reply("   [ERROR] (5) padded   ")
        assert finding.raw_line == "[ERROR] (5) padded"
        assert finding.severity == Severity.ERROR

    def test_section_code_and_quoted_identifier(self) -> None:
        (finding,) = parse_reply(
            "[ERROR] (12) (2.3.1) (Constant 'MAX_SIZE' is misnamed)"
        )
        assert finding.rule_tag == "ConstantName"
        assert finding.identifier_hint == "MAX_SIZE"
        assert finding.payload == "Constant 'MAX_SIZE' is misnamed"

    def test_locator_groups_are_not_payload(self) -> None:
        (finding,) = parse_reply(
            "[ERROR] Name 'doStuff' is not camelCase (2.2.1) (line 10)"
        )
        assert finding.payload is None
        assert finding.text == finding.raw_line
        assert finding.target_line == 10
        assert finding.rule_tag == "MethodName"
        assert finding.identifier_hint == "doStuff"

    def test_identifier_read_from_payload_when_present(self) -> None:
        (finding,) = parse_reply("[ERROR] 'outside' (3) (rename 'inside')")
        assert finding.identifier_hint == "inside"

    def test_no_parens_at_all(self) -> None:
        (finding,) = parse_reply("[ERROR] something is off")
        assert finding.target_line is None
        assert finding.payload is None
        assert finding.rule_tag is None
        assert finding.identifier_hint == "off"

    def test_parsing_is_idempotent(self) -> None:
        assert parse_reply(REPLY) == parse_reply(REPLY)

    def test_empty_reply(self) -> None:
        assert parse_reply("") == []
        assert parse_reply("\n \n\t\n") == []

    def test_finding_is_immutable(self) -> None:
        (finding,) = parse_reply("[ERROR] (1) x")
        with pytest.raises(ValueError):
            finding.target_line = 2  # type: ignore[misc]
        assert isinstance(finding, Finding)

"""Unit tests for domain models: results, compilers and config documents."""

import pytest

from domain.models import (
    ApiResult,
    Compiler,
    ContestConfig,
    JudgeOutcome,
    Problem,
    ProblemExample,
    ProblemExtra,
    ProblemInfo,
    SubmissionStatus,
    VerdictKind,
    classify_status,
    detect_compiler,
)
from domain.models.compiler import compiler_marker, find_compiler


class TestApiResult:
    def test_ok_carries_data_and_no_error(self):
        result = ApiResult.ok(5)

        assert result.success
        assert result.data == 5
        assert result.error is None
        assert bool(result)

    def test_fail_carries_error_and_no_data(self):
        result = ApiResult.fail("boom")

        assert not result.success
        assert result.data is None
        assert result.error == "boom"
        assert not result

    def test_ok_requires_payload(self):
        with pytest.raises(ValueError, match="must carry data"):
            ApiResult.ok(None)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"success": True, "data": 1, "error": "x"},
            {"success": False, "data": 1, "error": "x"},
            {"success": True},
            {"success": False},
        ],
    )
    def test_inconsistent_results_are_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ApiResult(**kwargs)


class TestCompilerDetection:
    def test_detects_marker_on_first_line(self):
        code = "// Nowcoder Compiler: C++(g++ 13)\nint main() {}\n"

        assert detect_compiler(code) is Compiler.CPP_GCC

    def test_name_match_is_case_insensitive(self):
        assert detect_compiler("# Nowcoder Compiler: python3\nprint(1)") is Compiler.PYTHON3

    def test_skips_blank_lines_and_other_comments(self):
        code = "\n\n// author: me\n// Nowcoder Compiler: Go\npackage main\n"

        assert detect_compiler(code) is Compiler.GO

    def test_marker_after_code_is_ignored(self):
        assert detect_compiler("int x;\n// Nowcoder Compiler: Java\n") is None

    def test_unknown_compiler_name(self):
        assert detect_compiler("// Nowcoder Compiler: Fortran\n") is None

    def test_language_id_limits_comment_tokens(self):
        code = "# Nowcoder Compiler: Python3\nprint(1)"

        assert detect_compiler(code, "cpp") is None
        assert detect_compiler(code, "python") is Compiler.PYTHON3
        assert detect_compiler(code, "plaintext") is Compiler.PYTHON3

    def test_marker_round_trip(self):
        marker = compiler_marker(Compiler.PYTHON3)

        assert marker == "# Nowcoder Compiler: Python3\n"
        assert detect_compiler(marker + "print(1)") is Compiler.PYTHON3

    def test_find_compiler_by_id(self):
        assert find_compiler("11") is Compiler.PYTHON3
        assert find_compiler("nope") is None


class TestVerdicts:
    @pytest.mark.parametrize(
        "status, kind",
        [
            (0, None),
            (5, VerdictKind.ACCEPTED),
            (12, VerdictKind.COMPILE_ERROR),
            (4, VerdictKind.REJECTED),
            (7, VerdictKind.REJECTED),
        ],
    )
    def test_classify_status(self, status, kind):
        assert classify_status(status) is kind

    def test_compile_error_message_surfaces_memo(self):
        status = SubmissionStatus(
            status=12, judge_reply_desc="编译错误", desc="", memo="a.cpp:1: error: expected ';'"
        )
        outcome = JudgeOutcome(
            submission_id=1, kind=VerdictKind.COMPILE_ERROR, polls=2, status=status
        )

        assert outcome.message == "编译错误\na.cpp:1: error: expected ';'"

    def test_timeout_message_points_to_site(self):
        outcome = JudgeOutcome(submission_id=99, kind=VerdictKind.TIMEOUT, polls=60)

        assert not outcome.accepted
        assert "99" in outcome.message
        assert "NowCoder site" in outcome.message


def test_contest_config_round_trip_keeps_camel_case_keys():
    config = ContestConfig(
        contest_id=7,
        problems=[
            Problem(
                info=ProblemInfo(index="A", title="Sum", problem_id=1, submit_count=4, accepted_count=3),
                extra=ProblemExtra(
                    tag_id="t", question_id="q", sub_tag_id="s", done_question_id="d",
                    content="## 题目描述\n\n", examples=[ProblemExample("1 2", "3")],
                ),
            ),
            Problem(info=ProblemInfo(index="B", title="Max")),
        ],
    )

    data = config.to_dict()
    restored = ContestConfig.from_dict(data)

    assert data["contestId"] == 7
    assert data["problems"][0]["extra"]["doneQuestionId"] == "d"
    assert "extra" not in data["problems"][1]
    assert restored.find_problem("A").extra.examples[0].output == "3"
    assert not restored.find_problem("B").has_details
    assert restored.find_problem("A").info.accepted_rate == 75.0

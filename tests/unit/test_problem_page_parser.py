"""Unit tests for problem page extraction."""

import pytest

from infrastructure.parsers import ProblemPageParser

PROBLEM_PAGE = """
<html>
<head>
<script>
window.pageInfo = {
    questionId: '10001',
    tagId: "20002",
    subTagId: '30003',
    doneQuestionId: '40004'
};
</script>
</head>
<body>
<div class="subject-describe">
  <div class="subject-question"><p>Compute <img src="https://www.nowcoder.com/equation?tex=a%2Bb" alt="a+b"> quickly.</p></div>
  <h2>输入描述:</h2><pre>Two integers a and b.</pre>
  <h2>输出描述:</h2><pre>One integer.</pre>
</div>
<div class="question-oi">
  <div class="question-oi-hd">示例1</div>
  <div class="question-oi-bd">
    <div class="question-oi-mod"><h2>输入</h2><div class="question-oi-cont"><pre>
1 2
</pre></div></div>
    <div class="question-oi-mod"><h2>输出</h2><div class="question-oi-cont"><pre>3</pre></div></div>
    <div class="question-oi-mod"><h2>说明</h2><div class="question-oi-cont"><pre>1 + 2 = 3</pre></div></div>
  </div>
</div>
<div class="question-oi">
  <div class="question-oi-bd">
    <div class="question-oi-mod"><h2>输入</h2><div class="question-oi-cont"><pre>5 5</pre></div></div>
    <div class="question-oi-mod"><h2>输出</h2><div class="question-oi-cont"><pre>   </pre></div></div>
  </div>
</div>
<div class="question-oi">
  <div class="question-oi-bd">
    <div class="question-oi-mod"><h2>输入</h2><div class="question-oi-cont"><pre>3
1
2</pre></div></div>
    <div class="question-oi-mod"><h2>输出</h2><div class="question-oi-cont"><pre>  6  </pre></div></div>
  </div>
</div>
</body>
</html>
"""


@pytest.fixture
def parser():
    return ProblemPageParser()


def test_extracts_submission_ids(parser):
    extra = parser.parse(PROBLEM_PAGE)

    assert extra.question_id == "10001"
    assert extra.tag_id == "20002"
    assert extra.sub_tag_id == "30003"
    assert extra.done_question_id == "40004"
    assert extra.is_submittable


def test_builds_statement_sections(parser):
    content = parser.parse(PROBLEM_PAGE).content

    assert content.startswith("## 题目描述\n\n")
    assert "$a+b$" in content
    assert content.endswith(
        "## 输入描述\n\nTwo integers a and b.\n\n## 输出描述\n\nOne integer.\n\n"
    )


def test_examples_are_trimmed_and_incomplete_ones_excluded(parser):
    examples = parser.parse(PROBLEM_PAGE).examples

    assert len(examples) == 2
    assert examples[0].input == "1 2"
    assert examples[0].output == "3"
    assert examples[0].tips == "1 + 2 = 3"
    assert examples[1].input == "3\n1\n2"
    assert examples[1].output == "6"
    assert examples[1].tips is None


def test_page_without_markers_degrades_softly(parser):
    extra = parser.parse("<html><body><p>Nothing here</p></body></html>")

    assert extra.question_id == ""
    assert not extra.is_submittable
    assert extra.examples == []
    assert extra.content == "## 题目描述\n\n\n\n## 输入描述\n\n\n\n## 输出描述\n\n\n\n"

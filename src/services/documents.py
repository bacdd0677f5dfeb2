"""Problem statement documents and starter code files inside a workspace."""

from pathlib import Path

from loguru import logger

from domain.models import Compiler, Problem
from domain.models.compiler import compiler_marker

EXAMPLES_HEADING = "## 样例"
INPUT_LABEL = "**输入**"
OUTPUT_LABEL = "**输出**"
TIPS_LABEL = "**说明**"


def render_problem_document(problem: Problem) -> str:
    """Render a problem as Markdown: title, statement and numbered examples."""
    content = f"# {problem.info.index}. {problem.info.title}\n\n"
    if problem.extra is None:
        return content

    content += problem.extra.content
    if problem.extra.examples:
        content += f"{EXAMPLES_HEADING}\n\n"
        for number, example in enumerate(problem.extra.examples, start=1):
            content += f"### 样例 {number}\n"
            content += f"{INPUT_LABEL}:\n```\n{example.input}\n```\n\n"
            content += f"{OUTPUT_LABEL}:\n```\n{example.output}\n```\n\n"
            if example.tips:
                content += f"{TIPS_LABEL}:  \n\n{example.tips}\n\n"
    return content


def write_problem_document(folder: Path, problem: Problem) -> Path:
    """Write ``<index>.md`` into the workspace folder, replacing any previous copy."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{problem.index}.md"
    path.write_text(render_problem_document(problem), encoding="utf-8")
    logger.info(f"Wrote problem document {path}")
    return path


def code_file_name(problem: Problem, compiler: Compiler) -> str:
    return f"{problem.index}.{compiler.config.ext}"


def create_code_file(folder: Path, problem: Problem, compiler: Compiler) -> Path:
    """Create ``<index>.<ext>`` headed by the compiler marker; existing files are kept."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / code_file_name(problem, compiler)
    if not path.exists():
        path.write_text(compiler_marker(compiler), encoding="utf-8")
        logger.info(f"Created code file {path}")
    return path

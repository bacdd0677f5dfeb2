"""Compilers accepted by the judge and detection of the compiler marker comment."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

MARKER_LABEL = "Nowcoder Compiler:"


class Compiler(str, Enum):
    """Judge language ids."""

    CPP_CLANG = "2"
    CPP_GCC = "38"
    C_GCC = "39"
    JAVA = "4"
    C = "1"
    PYTHON2 = "5"
    PYTHON3 = "11"
    PYPY2 = "24"
    PYPY3 = "25"
    CSHARP = "9"
    PHP = "8"
    JAVASCRIPT_V8 = "14"
    JAVASCRIPT_NODE = "13"
    R = "16"
    GO = "17"
    RUBY = "19"
    RUST = "27"
    SWIFT = "20"
    OBJC = "10"
    PASCAL = "3"
    MATLAB = "21"
    BASH = "23"
    SCALA = "28"
    KOTLIN = "29"
    GROOVY = "30"
    TYPESCRIPT = "31"

    @property
    def config(self) -> CompilerConfig:
        return COMPILER_CONFIG[self]


@dataclass(frozen=True)
class CompilerConfig:
    id: str
    name: str
    ext: str
    comment_token: str
    language_id: str


COMPILER_CONFIG: dict[Compiler, CompilerConfig] = {
    Compiler.CPP_CLANG: CompilerConfig("2", "C++（clang++18）", "cpp", "//", "cpp"),
    Compiler.CPP_GCC: CompilerConfig("38", "C++(g++ 13)", "cpp", "//", "cpp"),
    Compiler.C_GCC: CompilerConfig("39", "C(gcc 10)", "c", "//", "c"),
    Compiler.JAVA: CompilerConfig("4", "Java", "java", "//", "java"),
    Compiler.C: CompilerConfig("1", "C", "c", "//", "c"),
    Compiler.PYTHON2: CompilerConfig("5", "Python2", "py", "#", "python"),
    Compiler.PYTHON3: CompilerConfig("11", "Python3", "py", "#", "python"),
    Compiler.PYPY2: CompilerConfig("24", "pypy2", "py", "#", "python"),
    Compiler.PYPY3: CompilerConfig("25", "pypy3", "py", "#", "python"),
    Compiler.CSHARP: CompilerConfig("9", "C#", "cs", "//", "csharp"),
    Compiler.PHP: CompilerConfig("8", "PHP", "php", "//", "php"),
    Compiler.JAVASCRIPT_V8: CompilerConfig("14", "JavaScript V8", "js", "//", "javascript"),
    Compiler.JAVASCRIPT_NODE: CompilerConfig("13", "JavaScript Node", "js", "//", "javascript"),
    Compiler.R: CompilerConfig("16", "R", "r", "#", "r"),
    Compiler.GO: CompilerConfig("17", "Go", "go", "//", "go"),
    Compiler.RUBY: CompilerConfig("19", "Ruby", "rb", "#", "ruby"),
    Compiler.RUST: CompilerConfig("27", "Rust", "rs", "//", "rust"),
    Compiler.SWIFT: CompilerConfig("20", "Swift", "swift", "//", "swift"),
    Compiler.OBJC: CompilerConfig("10", "ObjC", "m", "//", "objective-c"),
    Compiler.PASCAL: CompilerConfig("3", "Pascal", "pas", "//", "pascal"),
    Compiler.MATLAB: CompilerConfig("21", "matlab", "m", "%", "matlab"),
    Compiler.BASH: CompilerConfig("23", "bash", "sh", "#", "shellscript"),
    Compiler.SCALA: CompilerConfig("28", "Scala", "scala", "//", "scala"),
    Compiler.KOTLIN: CompilerConfig("29", "Kotlin", "kt", "//", "kotlin"),
    Compiler.GROOVY: CompilerConfig("30", "Groovy", "groovy", "//", "groovy"),
    Compiler.TYPESCRIPT: CompilerConfig("31", "TypeScript", "ts", "//", "typescript"),
}


def compiler_marker(compiler: Compiler) -> str:
    """Header line that lets ``detect_compiler`` recognise the compiler later."""
    config = compiler.config
    return f"{config.comment_token} {MARKER_LABEL} {config.name}\n"


def find_compiler(name: str) -> Compiler | None:
    """Look a compiler up by display name (case-insensitive) or judge id."""
    wanted = name.strip().lower()
    for compiler, config in COMPILER_CONFIG.items():
        if config.name.lower() == wanted or config.id == wanted:
            return compiler
    return None


def detect_compiler(code: str, language_id: str | None = None) -> Compiler | None:
    """
    Detect the compiler from a ``<comment> Nowcoder Compiler: <name>`` line.

    Only the leading comment block is scanned; blank lines are skipped and the
    first non-comment line stops the search. ``language_id`` narrows the
    comment tokens considered (``plaintext`` means any language).
    """
    if language_id == "plaintext":
        language_id = None

    comment_tokens = {
        config.comment_token
        for config in COMPILER_CONFIG.values()
        if not language_id or config.language_id == language_id
    }

    for line in code.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue

        is_comment = False
        for token in comment_tokens:
            if not stripped.startswith(token):
                continue
            is_comment = True
            match = re.match(rf"^{re.escape(token)}\s*{MARKER_LABEL} (.+)$", stripped)
            if not match:
                continue
            # a marker naming an unknown compiler ends the search
            return find_compiler(match.group(1))

        if not is_comment:
            break

    return None

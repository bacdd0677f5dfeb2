"""Recursive conversion of statement HTML into Markdown."""

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

EQUATION_PATH = "nowcoder.com/equation"
HARD_BREAK = "  \n"
ZERO_WIDTH_SPACE = "\u200b"

# applied in order after the tree has been rendered
_POST_PROCESS_REPLACEMENTS = (
    ("****", ""),
    ("____", ""),
    ("**__", "**"),
    ("__**", "**"),
)


class MarkdownConverter:
    """
    Converts a parsed HTML fragment into Markdown.

    Inline emphasis, code, lists, tables, images and equation images are
    preserved. Equation images (``src`` under ``EQUATION_PATH``) become inline
    ``$...$`` math using their ``alt`` text as the formula.
    """

    def __init__(self, equation_path: str = EQUATION_PATH):
        self.equation_path = equation_path

    def convert(self, element: Optional[Tag]) -> str:
        """Render the children of ``element``; ``None`` renders as an empty string."""
        if element is None:
            return ""

        result = self._render_children(element)
        for old, new in _POST_PROCESS_REPLACEMENTS:
            result = result.replace(old, new)
        return result

    def convert_html(self, html: str) -> str:
        """Parse an HTML fragment and convert it."""
        return self.convert(BeautifulSoup(html, "html.parser"))

    def _render_children(self, node: Tag) -> str:
        return self._join(self._render_node(child) for child in node.children)

    def _render_node(self, node: PageElement) -> str:
        if isinstance(node, PreformattedString):
            # comments, doctype, CDATA
            return ""
        if isinstance(node, NavigableString):
            return self._render_text(str(node))
        if not isinstance(node, Tag):
            return ""

        name = node.name
        if name == "img":
            return self._render_image(node)
        if name == "br":
            return HARD_BREAK
        if name in ("p", "div"):
            return self._render_children(node) + HARD_BREAK
        if name in ("strong", "b"):
            return f"**{self._render_children(node)}**"
        if name in ("em", "i"):
            return f"*{self._render_children(node)}*"
        if name == "u":
            return self._render_underline(node)
        if name == "code":
            return f"`{self._render_children(node)}`"
        if name == "pre":
            return f"\n```\n{self._render_children(node)}\n```\n"
        if name == "li":
            return f"- {self._render_children(node)}\n"
        if name == "table":
            return f"\n{self._render_children(node)}\n"
        if name == "tr":
            return f"{self._render_children(node)}\n"
        if name in ("th", "td"):
            return f"| {self._render_children(node)} "
        if name == "blockquote":
            return self._render_blockquote(node)

        # ul/ol and unknown tags: list semantics live on li
        return self._render_children(node)

    def _render_text(self, text: str) -> str:
        return re.sub(r" *\n", HARD_BREAK, text.strip())

    def _render_image(self, node: Tag) -> str:
        src = node.get("src") or ""
        alt = node.get("alt") or ""
        if self.equation_path in src:
            return f" ${alt}$ "
        return f" ![{alt}]({src}) "

    def _render_underline(self, node: Tag) -> str:
        children = [
            child
            for child in node.children
            if not (isinstance(child, NavigableString) and not str(child).strip())
        ]
        first = children[0] if children else None
        if isinstance(first, Tag) and first.name == "strong":
            # underline around bold renders as plain bold
            parts = [self._render_children(first)]
            parts.extend(self._render_node(child) for child in children[1:])
            return f"**{self._join(parts)}**"
        return f"__{self._render_children(node)}__"

    def _render_blockquote(self, node: Tag) -> str:
        content = self._render_children(node).strip("\n")
        return "\n".join(f"> {line}" for line in content.split("\n")) + "\n"

    def _join(self, fragments: Iterable[str]) -> str:
        result = ""
        for fragment in fragments:
            result = self._append(result, fragment)
        return result

    def _append(self, result: str, fragment: str) -> str:
        if not fragment:
            return result

        if (not result or result.endswith("\n")) and fragment.startswith(" "):
            fragment = fragment.lstrip(" ")
            if not fragment:
                return result

        trailing = len(result) - len(result.rstrip("*"))
        leading = len(fragment) - len(fragment.lstrip("*"))
        if trailing and leading:
            if trailing == leading:
                return result[:-trailing] + fragment[leading:]
            return result + ZERO_WIDTH_SPACE + fragment

        return result + fragment

"""
IR normalisation.

The substitution rules below rewrite header, emphasis and list markers to
themselves, so on their own they leave text unchanged. The only effective
rule is that a document without a top-level header gets one prepended.
"""
import re
from typing import List, Tuple

DEFAULT_HEADER = "AI Model Instructions"

_RULES: List[Tuple[re.Pattern, str]] = [
    # headers
    (re.compile(r"^# (.+)$", re.MULTILINE), r"# \1"),
    (re.compile(r"^## (.+)$", re.MULTILINE), r"## \1"),
    # bold
    (re.compile(r"\*\*(.+?)\*\*"), r"**\1**"),
    # lists
    (re.compile(r"^- (.+)$", re.MULTILINE), r"- \1"),
    (re.compile(r"^\* (.+)$", re.MULTILINE), r"* \1"),
    (re.compile(r"^(\d+)\. (.+)$", re.MULTILINE), r"\1. \2"),
]

_TOP_HEADER_RE = re.compile(r"^# ", re.MULTILINE)


def has_top_level_header(text: str) -> bool:
    return bool(_TOP_HEADER_RE.search(text))


def normalize_instructions(text: str, default_header: str = DEFAULT_HEADER) -> str:
    """Return text as a headered Markdown document."""
    markdown = text
    for pattern, replacement in _RULES:
        markdown = pattern.sub(replacement, markdown)

    if not has_top_level_header(markdown):
        markdown = f"# {default_header}\n\n" + markdown
    return markdown

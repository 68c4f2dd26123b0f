"""
Plain-text cleanup for model output.

The model is asked for plain text but still slips in markdown emphasis and
LaTeX from time to time. SUBSTITUTIONS is applied once, in order; it is not
repeated until nothing changes, and unbalanced markup is left as is.
"""

import re
from typing import List, Optional, Pattern, Tuple

SUBSTITUTIONS: List[Tuple[Pattern[str], str]] = [
    # Markdown bold, italics and code spans
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`{1,3}([\s\S]*?)`{1,3}"), r"\1"),
    # LaTeX math delimiters
    (re.compile(r"\\\[|\\\]|\\\(|\\\)|\$\$|\$"), ""),
    (re.compile(r"\\text\s*\{([^}]*)\}"), r"\1"),
    (re.compile(r"\\frac\s*\{([^}]*)\}\s*\{([^}]*)\}"), r"(\1) / (\2)"),
    # Any other \command{...}
    (re.compile(r"\\[a-zA-Z]+\s*\{([^}]*)\}"), r"\1"),
    (re.compile(r"[ \t]{2,}"), " "),
    (re.compile(r"\\+"), ""),
]


def normalize(text: Optional[str]) -> str:
    """Strip markdown and LaTeX markup, keeping the inner text."""
    out = text or ""
    for pattern, replacement in SUBSTITUTIONS:
        out = pattern.sub(replacement, out)
    return out.strip()

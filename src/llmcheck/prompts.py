"""Style-review prompt and prompt assembly.

The reply format requested here is what
:mod:`llmcheck.reconcile.findings` parses. The model is free to
deviate, so the parser treats every field as optional.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

STYLE_REVIEW_PROMPT = """\
You are a code style reviewer. Check the code below against these nine \
guidelines and report every violation you are confident about.

## Guidelines

1.1.1 Summary documentation: the first sentence of every documentation \
comment summarises the element; it is not a fragment or a restatement of \
the name.
1.1.2 Documentation required: every public type and method is preceded by a \
documentation block comment (/** ... */), not a line comment (//) or a plain \
block comment (/* ... */).
2.1.1 Type names are UpperCamelCase nouns.
2.2.1 Method names are lowerCamelCase verbs.
2.3.1 Constant names (static final fields) are UPPER_SNAKE_CASE.
2.3.2 Non-constant field names are lowerCamelCase.
2.4.1 Parameter names are lowerCamelCase.
2.5.1 Local variable names are lowerCamelCase.
2.6.1 Type variable names are a single capital letter, optionally followed \
by a digit.

## Reply format

One violation per line, nothing else. No preamble, no summary, no markdown.

[ERROR] (<line>) (<section>) (<message naming the identifier in single quotes>)

Use [WARN] instead of [ERROR] when the violation is a judgement call. \
<line> is the number printed before the code line. <section> is one of the \
codes above. If there are no violations, reply with an empty message.

Example:
[ERROR] (12) (2.3.1) (Constant 'maxSize' should be UPPER_SNAKE_CASE)
"""


def load_prompt_template(path: Path | None = None) -> str:
    """Return the template at ``path``, or the built-in one.

    An unreadable override is logged and the built-in template is
    used, so a typo in the setting does not silently disable the check.
    """
    if path is None:
        return STYLE_REVIEW_PROMPT
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning(
            "event=prompt_template_unreadable path=%s error=%s", path, exc
        )
        return STYLE_REVIEW_PROMPT


def split_source_lines(source: str) -> list[str]:
    """Split on ``\\n`` (dropping a trailing ``\\r``), like the parser counts rows.

    A final newline does not start an extra empty line.
    """
    if not source:
        return []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def add_line_numbers(code: str) -> str:
    """Prefix each line with its right-aligned 1-based number and a dot.

    ``" 9.int a;"`` then ``"10.int b;"``. Every line, including the last,
    ends with a newline.
    """
    lines = split_source_lines(code)
    width = len(str(len(lines)))
    return "".join(
        f"{number:>{width}}.{line}\n"
        for number, line in enumerate(lines, start=1)
    )


def build_prompt(source: str, template: str = STYLE_REVIEW_PROMPT) -> str:
    return f"{template}\n\nCode:\n{add_line_numbers(source)}"

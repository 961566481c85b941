"""SQL comment stripping shared by the built-in drivers.

Two passes, in this order, repeated until the text stops changing:

1. Line comments, per physical line: every line is cut at the earliest
   occurrence of any of the dialect's line-comment prefixes.
2. Block comments over the whole text: each ``/* ... */`` region is deleted
   (shortest match, may span lines).  An unterminated ``/*`` is kept as is.

Stripping is lexical.  Comment markers inside string literals are treated
as comments too.
"""

from __future__ import annotations

from collections.abc import Sequence

BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"


def strip_line_comments(sql: str, prefixes: Sequence[str]) -> str:
    """Cut every line of ``sql`` at its first line-comment prefix.

    Lines are rejoined with ``\\n`` so statements spread over several lines
    keep their token boundaries.
    """
    return "\n".join(_cut_line(line, prefixes) for line in sql.split("\n"))


def _cut_line(line: str, prefixes: Sequence[str]) -> str:
    cut = len(line)
    for prefix in prefixes:
        index = line.find(prefix)
        if 0 <= index < cut:
            cut = index
    return line[:cut]


def strip_block_comments(sql: str) -> str:
    """Delete ``/* ... */`` regions from ``sql``.

    Single left-to-right pass tracking whether the cursor is inside a
    comment; the first ``*/`` after an opener closes it.
    """
    result: list[str] = []
    comment_start = -1
    i = 0
    length = len(sql)
    while i < length:
        if comment_start < 0:
            if sql.startswith(BLOCK_COMMENT_OPEN, i):
                comment_start = i
                i += len(BLOCK_COMMENT_OPEN)
                continue
            result.append(sql[i])
        elif sql.startswith(BLOCK_COMMENT_CLOSE, i):
            comment_start = -1
            i += len(BLOCK_COMMENT_CLOSE)
            continue
        i += 1

    # Unterminated comment: nothing to close it, keep the text
    if comment_start >= 0:
        result.append(sql[comment_start:])
    return "".join(result)


def trim_comment(sql: str, prefixes: Sequence[str]) -> str:
    """Remove line comments, then block comments, until nothing changes.

    Removing a comment can join the text around it into a new marker
    (``a -/* x */- b`` becomes ``a -- b``), so the passes repeat.  Every
    round that changes the text makes it shorter.
    """
    while True:
        trimmed = strip_block_comments(strip_line_comments(sql, prefixes))
        if trimmed == sql:
            return trimmed
        sql = trimmed


__all__ = [
    "strip_line_comments",
    "strip_block_comments",
    "trim_comment",
]

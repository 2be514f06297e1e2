"""Indent multi-line SQL fragments."""


def indent(sql: str, break_before_multiple_lines: bool = False) -> str:
    """Indent every line of ``sql`` by two spaces.

    With ``break_before_multiple_lines``, a fragment spanning several lines
    is also moved onto a line of its own; single-line fragments are returned
    unchanged, so that ``IN (1, 2, 3)`` stays on one line.
    """
    if break_before_multiple_lines:
        if "\n" not in sql:
            return sql
        return "\n  " + sql.replace("\n", "\n  ")
    return "  " + sql.replace("\n", "\n  ")

"""Plain-text tables for candidate lists."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ec2ssh.constants import TABLE_MIN_WIDTH, TABLE_PADDING

if TYPE_CHECKING:
    from ec2ssh.core.resolution import Candidate


def format_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    padding: int = TABLE_PADDING,
    min_width: int = TABLE_MIN_WIDTH,
) -> str:
    """Render rows as left-aligned, space-padded columns.

    A dash underline the width of each header follows the header row. Every
    column but the last is padded to ``max(min_width, widest cell + padding)``;
    the last column is written as-is.

    Parameters
    ----------
    headers : Sequence[str]
        Column titles
    rows : Sequence[Sequence[str]]
        Table body, one sequence of cells per row
    padding : int
        Spaces added after the widest cell of a column
    min_width : int
        Minimum column width, padding included

    Returns
    -------
    str
        Table text, one line per row, each terminated by a newline
    """
    lines = [list(headers), ["-" * len(header) for header in headers]]
    lines.extend([str(cell) for cell in row] for row in rows)

    widths = [
        max(min_width, max(len(line[column]) for line in lines) + padding)
        for column in range(len(headers) - 1)
    ]

    rendered = []
    for line in lines:
        cells = [cell.ljust(width) for cell, width in zip(line, widths)]
        cells.append(line[-1])
        rendered.append("".join(cells) + "\n")

    return "".join(rendered)


def format_instance_list(candidates: Sequence[Candidate]) -> str:
    """Render candidates as a Name / Instance ID / Private IP table."""
    return format_table(
        ["Name", "Instance ID", "Private IP"],
        [[c.display_name, c.instance_id, c.private_ip] for c in candidates],
    )


def format_candidate_table(candidates: Sequence[Candidate]) -> str:
    """Render candidates as a table numbered from 1 for the selection prompt."""
    return format_table(
        ["n", "Name", "Instance ID", "Private IP"],
        [
            [str(index), c.display_name, c.instance_id, c.private_ip]
            for index, c in enumerate(candidates, start=1)
        ],
    )

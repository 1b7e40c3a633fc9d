"""Split loosely structured command output into rows and columns."""

import re
from dataclasses import dataclass

Row = list[str]
Table = list[Row]


@dataclass(frozen=True)
class ExactDelimiter:
    """Split rows and columns on literal regular expressions.

    Used for colon-separated files such as /etc/group. Empty
    fields are kept, so "sudo:x:27:" yields four columns.
    """

    row_separator: str = "\n"
    column_separator: str = ":"

    def rows(self, text: str) -> list[str]:
        return re.split(self.row_separator, text)

    def columns(self, row: str) -> Row:
        return re.split(self.column_separator, row)


@dataclass(frozen=True)
class MultiSpace:
    """Columns separated by two or more whitespace characters.

    `docker ps -a` pads its columns with runs of spaces while
    single spaces appear inside fields ("Up 3 hours"), so only a
    run of at least two whitespace characters is a boundary.
    """

    _boundary = re.compile(r"\s{2,}")

    def rows(self, text: str) -> list[str]:
        return text.splitlines()

    def columns(self, row: str) -> Row:
        return self._boundary.split(row.strip())


@dataclass(frozen=True)
class Whitespace:
    """Plain whitespace splitting, for fields that never hold spaces."""

    def rows(self, text: str) -> list[str]:
        return text.splitlines()

    def columns(self, row: str) -> Row:
        return row.split()


MULTISPACE = MultiSpace()
WHITESPACE = Whitespace()

SeparatorPolicy = ExactDelimiter | MultiSpace | Whitespace


def tokenize(
    text: str,
    policy: SeparatorPolicy = WHITESPACE,
    min_fields: int = 0,
) -> Table:
    """Tokenize raw output into a table.

    Args:
        text: Raw file contents or command output
        policy: How rows and columns are separated
        min_fields: Rows with fewer columns than this are dropped
            (guards against blank and malformed lines)

    Returns:
        Rows in source order. Blank rows are skipped and empty
        text gives an empty table. Rows may differ in length.
    """
    table: Table = []
    for line in policy.rows(text):
        if not line.strip():
            continue
        row = policy.columns(line)
        if len(row) < min_fields:
            continue
        table.append(row)
    return table

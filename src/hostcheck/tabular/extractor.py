"""Pull a single column out of a tokenized table."""

from hostcheck.tabular.tokenizer import Table


def column(table: Table, index: int, skip_header: bool = False) -> list[str]:
    """Return every value at `index`, in row order.

    Args:
        table: Rows produced by tokenize()
        index: Zero-based column index
        skip_header: Drop the first row unconditionally. Callers
            must know whether their source always prints a header.

    Returns:
        Values from rows long enough to have the column.
        Shorter rows contribute nothing. Duplicates are kept.
    """
    rows = table[1:] if skip_header else table
    if index < 0:
        return []
    return [row[index] for row in rows if index < len(row)]

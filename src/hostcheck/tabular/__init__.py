"""Tabular parsing of command and file output."""

from hostcheck.tabular.extractor import column
from hostcheck.tabular.tokenizer import (
    MULTISPACE,
    WHITESPACE,
    ExactDelimiter,
    MultiSpace,
    Row,
    SeparatorPolicy,
    Table,
    Whitespace,
    tokenize,
)

__all__ = [
    "MULTISPACE",
    "WHITESPACE",
    "ExactDelimiter",
    "MultiSpace",
    "Row",
    "SeparatorPolicy",
    "Table",
    "Whitespace",
    "column",
    "tokenize",
]

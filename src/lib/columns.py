"""
Column balancing for multi-column panels

Distributes the buffered children of one parent across N columns while
preserving their original order.
"""

import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def columnCount_clamp(columns: int, max_columns: int) -> int:
    """Clamp a requested column count to [1, max_columns]"""
    upper = max(1, int(max_columns))
    return max(1, min(int(columns), upper))


def columns_balance(
    records: Sequence[T],
    columns: int,
    balance: bool = True,
    min_items_per_column: int = 2,
    max_columns: int = 6,
) -> List[List[T]]:
    """
    Split ``records`` into columns.

    With balancing, each column takes ``ceil(count / columns)`` records;
    otherwise each takes ``min_items_per_column``. Records are assigned in
    order, moving to the next column once the current one is full, and the
    last column absorbs any remainder. The result always has exactly the
    clamped column count, so empty input yields empty columns.

    Example:
        >>> [len(c) for c in columns_balance(list(range(7)), 3)]
        [3, 3, 1]
    """
    count = len(records)
    columns = columnCount_clamp(columns, max_columns)
    result: List[List[T]] = [[] for _ in range(columns)]
    if not count:
        return result

    if balance:
        per_column = math.ceil(count / columns)
    else:
        per_column = max(1, int(min_items_per_column))

    index = 0
    for record in records:
        result[index].append(record)
        if len(result[index]) >= per_column and index < columns - 1:
            index += 1
    return result


def columnSizes_get(columns: Sequence[Sequence[T]]) -> List[int]:
    return [len(column) for column in columns]

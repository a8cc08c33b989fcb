"""Console formatting of tooltip diagnostics."""

from typing import Iterable

from rich.table import Table

from tooltip_taxonomy.entities import Condition


def format_vocabulary_usage_table(vid: str, conditions: Iterable[Condition]) -> Table:
    """Format the conditions that still use a vocabulary as a Rich table.

    Shown as a warning before the vocabulary is removed.
    """
    rows = list(conditions)
    table = Table(title=f"Tooltip conditions using '{vid}' (Found: {len(rows)})")
    table.add_column("Condition", style="cyan")
    table.add_column("Label")
    table.add_column("Weight", style="yellow", justify="right")
    table.add_column("Paths", style="blue")

    for condition in rows:
        pages = condition.path.pages if condition.path else ()
        negate = bool(condition.path and condition.path.negate)
        table.add_row(
            condition.id,
            condition.label or "-",
            str(condition.weight),
            ("NOT " if negate else "") + (", ".join(pages) or "-"),
        )

    return table

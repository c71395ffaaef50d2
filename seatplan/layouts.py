from collections import namedtuple
from math import ceil

Slot = namedtuple("Slot", ["index", "row", "column", "slot_id"])


def generate_layout(slot_count, units_per_row):
    """Number slots left to right, front row first. Rows and columns start at 1."""
    slots = []

    for index in range(slot_count):
        row = index // units_per_row + 1
        column = index % units_per_row + 1
        slots.append(
            Slot(
                index=index,
                row=row,
                column=column,
                slot_id=f"R{row}-C{column}"
            )
        )

    return slots


def grid_rows(grid, units_per_row):
    # a pair grid can outgrow rows * units_per_row, so the row count follows the grid
    row_count = ceil(len(grid) / units_per_row) if grid else 0
    return [grid[r * units_per_row:(r + 1) * units_per_row] for r in range(row_count)]

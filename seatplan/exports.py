from pathlib import Path

import pandas as pd
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

from seatplan.layouts import generate_layout, grid_rows
from seatplan.models import MALE, PAIR


def _occupants(seat, mode):
    if mode == PAIR:
        return list(seat)
    return [] if seat is None else [seat]


def seat_rows(grid, units_per_row, mode):
    """Flatten a grid into one record per person, empty slots included."""
    data = []
    for slot in generate_layout(len(grid), units_per_row):
        occupants = _occupants(grid[slot.index], mode)
        if not occupants:
            data.append({
                "slot": slot.index,
                "slot_id": slot.slot_id,
                "row": slot.row,
                "column": slot.column,
                "position": None,
                "id": None,
                "gender": None
            })
        for position, person in enumerate(occupants):
            data.append({
                "slot": slot.index,
                "slot_id": slot.slot_id,
                "row": slot.row,
                "column": slot.column,
                "position": position,
                "id": person.id,
                "gender": person.gender
            })
    return data


def export_seating_excel(grid, units_per_row, mode, file_path):
    df = pd.DataFrame(seat_rows(grid, units_per_row, mode))
    df.to_excel(file_path, index=False)
    return Path(file_path)


def _label(person):
    if person is None:
        return "-"
    return f"{person.id} ({'M' if person.gender == MALE else 'F'})"


def export_seating_pdf(grid, units_per_row, mode, file_path, title="Seating Chart"):
    c = canvas.Canvas(str(file_path), pagesize=landscape(A4))
    width, height = landscape(A4)

    y = height - 50
    c.setFont("Helvetica-Bold", 16)
    c.drawString(50, y, title)
    y -= 30

    # board sits in front of the first row
    c.setFont("Helvetica", 10)
    c.rect(width / 2 - 100, y - 18, 200, 22)
    c.drawCentredString(width / 2, y - 11, "Board")
    y -= 45

    cell_w = (width - 100) / units_per_row
    cell_h = 36

    for row in grid_rows(grid, units_per_row):
        if y < 60:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - 50

        for col, seat in enumerate(row):
            x = 50 + col * cell_w
            c.rect(x + 4, y - cell_h, cell_w - 8, cell_h)
            occupants = _occupants(seat, mode)
            if mode == PAIR:
                left = occupants[0] if occupants else None
                right = occupants[1] if len(occupants) > 1 else None
                c.drawCentredString(x + cell_w / 4 + 2, y - cell_h / 2 - 3, _label(left))
                c.drawCentredString(x + 3 * cell_w / 4 - 2, y - cell_h / 2 - 3, _label(right))
            else:
                c.drawCentredString(x + cell_w / 2, y - cell_h / 2 - 3, _label(seat))
        y -= cell_h + 10

    c.save()
    return Path(file_path)

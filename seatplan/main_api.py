import logging
import os
import random
import tempfile
from pathlib import Path
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from seatplan import settings
from seatplan.allocator import allocate_pair_seats, allocate_single_seats, pair_capacity
from seatplan.exports import export_seating_excel, export_seating_pdf
from seatplan.layouts import generate_layout
from seatplan.models import PAIR, External, OddEven, Ranges
from seatplan.planner import validate_pinned_seats
from seatplan.roster import build_roster
from seatplan.student_import import parse_roster_text

logger = logging.getLogger(__name__)

app = FastAPI(title = "Seating Planner API")


class RosterEntryIn(BaseModel):
    number: int
    gender: Literal["male", "female"]


class LabelingIn(BaseModel):
    type: Literal["odd-even", "ranges", "external"] = "odd-even"
    male_ranges: List[str] = []
    female_ranges: List[str] = []
    entries: List[RosterEntryIn] = []


class SeatingRequest(BaseModel):
    student_count: int = Field(ge = 1, le = settings.MAX_STUDENTS)
    mode: Literal["single", "pair"] = "single"
    rows: int = Field(ge = 1, le = settings.MAX_ROWS)
    units_per_row: int = Field(ge = 1, le = settings.MAX_UNITS_PER_ROW)
    pair_order: Literal["male-left", "female-left", "alternate", "random"] = settings.DEFAULT_PAIR_ORDER
    sequential: bool = False
    randomize_ids: bool = False
    labeling: LabelingIn = LabelingIn()
    # slot index -> one or two pinned ids, set once at setup
    pinned_seats: Dict[int, List[int]] = {}
    # person id -> slot index, toggled from the chart
    pinned_people: Dict[int, int] = {}
    # same roster_seed means the same randomised ids across re-shuffles
    roster_seed: Optional[int] = None
    seed: Optional[int] = None


class RosterText(BaseModel):
    text: str


def _rule(labeling):
    if labeling.type == "ranges":
        return Ranges(labeling.male_ranges, labeling.female_ranges)
    if labeling.type == "external":
        return External([(e.number, e.gender) for e in labeling.entries])
    return OddEven()


def _person(person):
    if person is None:
        return None
    return {"id": person.id, "gender": person.gender, "original_number": person.original_number}


def _check_pins(req, roster):
    errors = validate_pinned_seats(req.pinned_seats, _id_limit(req, roster), req.mode)
    if errors:
        raise HTTPException(status_code = 400, detail = {"pinned_seats": errors})

    known = {p.id for p in roster}
    unknown = [pid for pid in req.pinned_people if pid not in known]
    if unknown:
        raise HTTPException(status_code = 400, detail = f"Unknown pinned people: {unknown}")

    slot_count = _slot_count(req, roster)
    outside = [pid for pid, slot in req.pinned_people.items() if not 0 <= slot < slot_count]
    if outside:
        raise HTTPException(status_code = 400, detail = f"Pinned people outside the {slot_count} seats: {outside}")


def _slot_count(req, roster):
    if req.mode == PAIR:
        return pair_capacity(len(roster), req.units_per_row, req.rows)
    return req.rows * req.units_per_row


def _id_limit(req, roster):
    if req.labeling.type == "external":
        return max((p.id for p in roster), default = 0)
    return req.student_count


def _export_path(suffix):
    settings.EXPORT_DIR.mkdir(parents = True, exist_ok = True)
    fd, name = tempfile.mkstemp(prefix = "seating_", suffix = suffix, dir = settings.EXPORT_DIR)
    os.close(fd)
    return Path(name)


def run_seating(req):
    if req.labeling.type == "external" and not req.labeling.entries:
        raise HTTPException(status_code = 400, detail = "External roster has no entries")

    roster_seed = req.roster_seed
    if req.randomize_ids and roster_seed is None:
        roster_seed = random.randrange(2 ** 32)

    roster = build_roster(req.student_count, _rule(req.labeling), req.randomize_ids, random.Random(roster_seed))
    _check_pins(req, roster)

    rng = random.Random(req.seed) if req.seed is not None else None
    if req.mode == PAIR:
        seats = allocate_pair_seats(
            roster, req.pinned_people, req.units_per_row, req.pair_order,
            req.pinned_seats, req.rows, req.sequential, rng,
        )
    else:
        seats = allocate_single_seats(
            roster, req.pinned_people, req.rows * req.units_per_row,
            {k: v[0] for k, v in req.pinned_seats.items() if v}, req.sequential, rng,
        )

    logger.info("seated %s people into %s %s slots", len(roster), len(seats), req.mode)
    return roster_seed, seats


@app.get("/")
def root():
    return {"message": "Seating Planner API is running !"}


@app.post("/roster/import")
def import_roster(body: RosterText):
    entries = parse_roster_text(body.text)
    if not entries:
        raise HTTPException(status_code = 400, detail = "No valid entries, check the format: <number>, <gender>")

    return {
        "count": len(entries),
        "entries": [{"number": e.number, "gender": e.gender} for e in entries]
    }


@app.post("/seating")
def generate_seating(req: SeatingRequest):
    roster_seed, seats = run_seating(req)

    if req.mode == PAIR:
        payload = [[_person(p) for p in pair] for pair in seats]
    else:
        payload = [_person(p) for p in seats]

    return {
        "mode": req.mode,
        "units_per_row": req.units_per_row,
        "roster_seed": roster_seed,
        "slots": [
            {"index": slot.index, "row": slot.row, "column": slot.column, "slot_id": slot.slot_id}
            for slot in generate_layout(len(seats), req.units_per_row)
        ],
        "seats": payload
    }


@app.post("/seating/export/pdf")
def export_pdf(req: SeatingRequest, title: str = "Seating Chart"):
    _, seats = run_seating(req)

    file_path = export_seating_pdf(seats, req.units_per_row, req.mode, _export_path(".pdf"), title)

    return FileResponse(
        path=str(file_path),
        filename=file_path.name,
        media_type="application/pdf"
    )


@app.post("/seating/export/excel")
def export_excel(req: SeatingRequest):
    _, seats = run_seating(req)

    file_path = export_seating_excel(seats, req.units_per_row, req.mode, _export_path(".xlsx"))

    return FileResponse(
        path=str(file_path),
        filename=file_path.name,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

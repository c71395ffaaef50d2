import os
from pathlib import Path

MAX_STUDENTS = 100
MAX_ROWS = 15
MAX_UNITS_PER_ROW = 15

DEFAULT_PAIR_ORDER = "male-left"

EXPORT_DIR = Path(os.getenv("SEATPLAN_EXPORT_DIR", Path(__file__).resolve().parent / "exports"))

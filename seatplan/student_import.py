import logging
from pathlib import Path

import pandas as pd

from seatplan.models import FEMALE, MALE, RosterEntry

logger = logging.getLogger(__name__)

MALE_MARKER = "남"
MALE_TOKENS = {"m", "male"}


def parse_gender(token):
    token = str(token).strip().lower()
    if MALE_MARKER in token or token in MALE_TOKENS:
        return MALE
    return FEMALE


def _to_entries(df):
    numbers = df["number"].astype(str).str.extract(r"^\s*([+-]?\d+)", expand=False)
    df = df.assign(number=pd.to_numeric(numbers, errors="coerce"))

    skipped = int(df["number"].isna().sum())
    if skipped:
        logger.debug("skipped %s roster lines without a leading number", skipped)

    entries = []
    for _, row in df.dropna(subset=["number"]).iterrows():
        entries.append(RosterEntry(number=int(row["number"]), gender=parse_gender(row["gender"])))
    return entries


def parse_roster_text(text):
    """
    Read "<number>, <gender>" lines, one person per line, in file order.

    Lines with fewer than two fields or a non-numeric first field are skipped.
    An empty text gives an empty list.
    """
    rows = []
    for line in text.strip().split("\n"):
        parts = [p.strip() for p in line.split(",")]
        if len(parts) >= 2:
            rows.append(parts[:2])

    if not rows:
        return []

    return _to_entries(pd.DataFrame(rows, columns=["number", "gender"]))


def read_roster_file(file_path):
    path = Path(file_path)

    if path.suffix.lower() == ".xlsx":
        df = pd.read_excel(path, header=None, usecols=[0, 1], names=["number", "gender"], dtype=str)
        return _to_entries(df.fillna(""))

    return parse_roster_text(path.read_text(encoding="utf-8-sig"))

import argparse
import logging
import sys

from seatplan import settings
from seatplan.layouts import grid_rows
from seatplan.models import MALE, PAIR, PAIR_ORDERS, SINGLE, External, LayoutShape, OddEven, Ranges
from seatplan.planner import SeatingPlanner, validate_pinned_seats
from seatplan.student_import import read_roster_file


def pin_arg(value):
    """Read one "3=7" or "3=7,8" argument as (slot, ids)."""
    slot, sep, ids = value.partition("=")
    try:
        numbers = [int(i) for i in ids.split(",") if i.strip()]
        if not sep or not numbers:
            raise ValueError(value)
        return int(slot), numbers
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected SLOT=ID or SLOT=ID,ID, got {value!r}")


def format_seat(person):
    if person is None:
        return "[  --  ]"
    return f"[{person.id:>3}{'M' if person.gender == MALE else 'F':>2} ]"


def print_chart(seats, units_per_row, mode):
    print("\n" + "BOARD".center(units_per_row * (18 if mode == PAIR else 9)))
    for row in grid_rows(seats, units_per_row):
        if mode == PAIR:
            cells = [
                format_seat(pair[0] if pair else None) + format_seat(pair[1] if len(pair) > 1 else None)
                for pair in row
            ]
        else:
            cells = [format_seat(seat) for seat in row]
        print(" ".join(cells))


def build_parser():
    parser = argparse.ArgumentParser(prog = "seatplan", description = "Print a classroom seating chart.")
    parser.add_argument("count", type = int, help = "number of students")
    parser.add_argument("--mode", choices = [SINGLE, PAIR], default = SINGLE)
    parser.add_argument("--rows", type = int, default = 5)
    parser.add_argument("--per-row", type = int, default = 6, help = "seats (single) or teams (pair) per row")
    parser.add_argument("--pair-order", choices = PAIR_ORDERS, default = settings.DEFAULT_PAIR_ORDER)
    parser.add_argument("--sequential", action = "store_true", help = "seat by number instead of randomly")
    parser.add_argument("--randomize-ids", action = "store_true")
    parser.add_argument("--male", action = "append", help = "male number ranges, e.g. 1-5,10")
    parser.add_argument("--female", action = "append", help = "female number ranges, e.g. 6-9")
    parser.add_argument("--roster", help = "roster file with '<number>, <gender>' lines (.csv, .txt or .xlsx)")
    parser.add_argument("--pin", action = "append", type = pin_arg, help = "pin a seat: SLOT=ID or SLOT=ID,ID")
    parser.add_argument("--verbose", "-v", action = "store_true")
    return parser


def main(argv = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level = logging.DEBUG if args.verbose else logging.WARNING)

    if args.count < 1 or args.count > settings.MAX_STUDENTS:
        print(f"Student count must be between 1 and {settings.MAX_STUDENTS}")
        return 2

    if args.roster:
        entries = read_roster_file(args.roster)
        if not entries:
            print("No valid entries, check the format: <number>, <gender>")
            return 2
        rule = External(entries)
    elif args.male:
        rule = Ranges(args.male, args.female or [])
    else:
        rule = OddEven()

    pins = dict(args.pin or [])
    errors = validate_pinned_seats(pins, args.count, args.mode)
    if errors:
        for slot, message in sorted(errors.items()):
            print(f"Seat {slot}: {message}")
        return 2
    if args.mode == SINGLE:
        pins = {slot: ids[0] for slot, ids in pins.items() if ids}

    shape = LayoutShape(args.rows, args.per_row, args.mode)
    planner = SeatingPlanner(
        args.count,
        shape,
        rule = rule,
        sequential = args.sequential,
        randomize_ids = args.randomize_ids,
        pair_order = args.pair_order,
        pinned_seats = pins,
    )

    print_chart(planner.seats, args.per_row, args.mode)
    return 0


if __name__ == "__main__":
    sys.exit(main())

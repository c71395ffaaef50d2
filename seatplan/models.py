from collections import namedtuple

MALE = "male"
FEMALE = "female"

SINGLE = "single"
PAIR = "pair"

MALE_LEFT = "male-left"
FEMALE_LEFT = "female-left"
ALTERNATE = "alternate"
RANDOM = "random"
PAIR_ORDERS = (MALE_LEFT, FEMALE_LEFT, ALTERNATE, RANDOM)


# id is the number shown and pinned; original_number drives gender rules and
# sequential ordering
Person = namedtuple("Person", ["id", "gender", "original_number"])

RosterEntry = namedtuple("RosterEntry", ["number", "gender"])


class OddEven:
    """Odd numbers are male, even numbers are female."""

    def __repr__(self):
        return "OddEven()"


class Ranges:
    def __init__(self, male_ranges, female_ranges=()):
        # female ranges are kept for display only; anyone not male is female
        self.male_ranges = list(male_ranges)
        self.female_ranges = list(female_ranges)

    def __repr__(self):
        return f"Ranges(male_ranges={self.male_ranges!r})"


class External:
    def __init__(self, entries):
        self.entries = [RosterEntry(int(number), gender) for number, gender in entries]

    def __repr__(self):
        return f"External(entries={len(self.entries)})"


class LayoutShape:
    def __init__(self, rows, units_per_row, mode=SINGLE):
        self.rows = rows
        self.units_per_row = units_per_row
        self.mode = mode

    @property
    def capacity(self):
        return self.rows * self.units_per_row

    def __repr__(self):
        return f"LayoutShape(rows={self.rows}, units_per_row={self.units_per_row}, mode={self.mode!r})"


def pinned_ids(value):
    """Normalise a pinned-seat value (one id or a sequence of ids) to a tuple of at most two ids."""
    if value is None:
        return ()
    if isinstance(value, int):
        return (value,)
    return tuple(value)[:2]

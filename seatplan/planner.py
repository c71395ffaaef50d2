from seatplan.allocator import allocate_pair_seats, allocate_single_seats, pair_capacity
from seatplan.models import MALE_LEFT, PAIR, pinned_ids
from seatplan.roster import build_roster, default_rule


class PinError(ValueError):
    pass


def validate_pinned_seats(pinned_seats, student_count, mode):
    """
    Check setup-time seat pins the way the setup form does.

    Returns a dict of slot index -> message; an empty dict means the pins
    can be handed to the allocator.
    """
    errors = {}
    seen = set()

    for slot_index, value in pinned_seats.items():
        numbers = pinned_ids(value)
        if mode != PAIR and len(numbers) > 1:
            errors[slot_index] = "a single seat holds one number"
            continue
        if mode == PAIR and not isinstance(value, int) and len(tuple(value)) > 2:
            errors[slot_index] = "a team holds at most two numbers"
            continue
        for num in numbers:
            if num <= 0 or num > student_count:
                errors[slot_index] = f"maximum number is {student_count}"
                break
            if num in seen:
                errors[slot_index] = f"{num} is already entered"
                break
            seen.add(num)

    return errors


class SeatingPlanner:
    """
    One seating session: a fixed roster, the seat pins chosen at setup and
    the people pinned by clicking on them in the chart.

    Every action recomputes the whole grid from scratch.
    """

    def __init__(self, student_count, shape, rule=None, sequential=False, randomize_ids=False,
                 pair_order=MALE_LEFT, pinned_seats=None, rng=None):
        self.shape = shape
        self.sequential = sequential
        self.pair_order = pair_order
        self.rng = rng
        self.roster = build_roster(student_count, rule or default_rule(), randomize_ids, rng)
        self.pinned_seats = dict(pinned_seats or {})
        self.pinned_people = {}
        self.seats = self.generate()

    @property
    def slot_count(self):
        if self.shape.mode == PAIR:
            return pair_capacity(len(self.roster), self.shape.units_per_row, self.shape.rows)
        return self.shape.capacity

    def generate(self):
        if self.shape.mode == PAIR:
            return allocate_pair_seats(
                self.roster,
                self.pinned_people,
                self.shape.units_per_row,
                self.pair_order,
                self.pinned_seats,
                self.shape.rows,
                self.sequential,
                self.rng,
            )
        return allocate_single_seats(
            self.roster,
            self.pinned_people,
            self.shape.capacity,
            self.pinned_seats,
            self.sequential,
            self.rng,
        )

    def shuffle(self):
        self.seats = self.generate()
        return self.seats

    def slot_of(self, person_id):
        for index, seat in enumerate(self.seats):
            occupants = seat if self.shape.mode == PAIR else [seat]
            if any(p is not None and p.id == person_id for p in occupants):
                return index
        return None

    def toggle_pin(self, person_id, slot_index=None):
        """Pin a seated person where they sit now, or release them if already pinned."""
        if person_id in self.pinned_people:
            return self.unpin(person_id)

        if not any(p.id == person_id for p in self.roster):
            raise PinError(f"unknown person {person_id}")
        if slot_index is None:
            slot_index = self.slot_of(person_id)
        if slot_index is None or not 0 <= slot_index < self.slot_count:
            raise PinError(f"person {person_id} has no seat to pin")
        # the allocator only honours a people pin on a slot nobody else has claimed
        if slot_index in self.pinned_seats or slot_index in self.pinned_people.values():
            raise PinError(f"seat {slot_index} is already pinned")

        self.pinned_people[person_id] = slot_index
        return self.shuffle()

    def unpin(self, person_id):
        self.pinned_people.pop(person_id, None)
        return self.shuffle()

    def clear_pins(self):
        self.pinned_people.clear()
        return self.shuffle()

    def pinned_roster(self):
        by_id = {p.id: p for p in self.roster}
        return [by_id[pid] for pid in self.pinned_people if pid in by_id]

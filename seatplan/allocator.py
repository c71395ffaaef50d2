import logging
from math import ceil

from seatplan.models import ALTERNATE, FEMALE, FEMALE_LEFT, MALE, MALE_LEFT, RANDOM, pinned_ids
from seatplan.shuffle import shuffled

logger = logging.getLogger(__name__)


def _sort_key(person):
    return person.original_number or person.id


def _find_person(roster, person_id):
    for person in roster:
        if person.id == person_id:
            return person
    return None


def allocate_single_seats(roster, pinned_people, capacity, pinned_seats=None, sequential=False, rng=None):
    """
    Fill `capacity` single seats, left to right and top to bottom.

    pinned_seats (seat index -> person id) are placed first, then
    pinned_people (person id -> seat index) into seats that are still empty,
    then everyone else in original-number order (sequential) or shuffled.
    Empty seats are returned as None so the chart keeps its shape.
    """
    result = [None] * capacity
    used_ids = set()

    for seat_index, person_id in (pinned_seats or {}).items():
        if not 0 <= seat_index < capacity:
            logger.debug("pinned seat %s is outside a grid of %s seats", seat_index, capacity)
            continue
        person = _find_person(roster, person_id)
        if person is None:
            logger.debug("pinned seat %s names unknown id %s", seat_index, person_id)
            continue
        result[seat_index] = person
        used_ids.add(person.id)

    for person_id, seat_index in pinned_people.items():
        if not 0 <= seat_index < capacity or result[seat_index] is not None:
            continue
        person = _find_person(roster, person_id)
        if person is None or person.id in used_ids:
            continue
        result[seat_index] = person
        used_ids.add(person.id)

    unfixed = [s for s in roster if s.id not in used_ids]
    to_place = sorted(unfixed, key=_sort_key) if sequential else shuffled(unfixed, rng)

    placed = 0
    for i in range(capacity):
        if result[i] is None and placed < len(to_place):
            result[i] = to_place[placed]
            placed += 1

    if placed < len(to_place):
        logger.debug("%s people did not fit into %s seats", len(to_place) - placed, capacity)

    return result


def pair_capacity(roster_size, teams_per_row, rows):
    # never fewer teams than needed to seat everyone
    return max(teams_per_row * rows, ceil(roster_size / 2))


def _take_first(pool, used_ids):
    for person in pool:
        if person.id not in used_ids:
            return person
    return None


def _pick_partner(pair_order, pair_index, position, males, females, remaining, used_ids, rng):
    if pair_order == RANDOM:
        candidates = [s for s in remaining if s.id not in used_ids]
        return shuffled(candidates, rng)[0] if candidates else None

    if pair_order == FEMALE_LEFT or (pair_order == ALTERNATE and pair_index % 2 == 1):
        preferred = (females, males)
    else:
        preferred = (males, females)

    # the left seat (position 0) takes the first preference, the right seat the other
    if position == 1:
        preferred = preferred[::-1]

    for pool in preferred:
        person = _take_first(pool, used_ids)
        if person is not None:
            return person
    return None


def allocate_pair_seats(
    roster,
    pinned_people,
    teams_per_row,
    pair_order=MALE_LEFT,
    pinned_seats=None,
    rows=1,
    sequential=False,
    rng=None,
):
    """
    Fill two-person teams.

    pinned_seats maps a team index to one or two ids; pinned_people maps an
    id to a team index and only lands in a team nobody else occupies yet.
    Sequential mode fills teams by original number and ignores gender.
    Random mode picks each next seat by pair_order and falls back to anyone
    left when the preferred gender has run out.
    """
    total_pairs = pair_capacity(len(roster), teams_per_row, rows)
    pairs = [[] for _ in range(total_pairs)]
    used_ids = set()

    for pair_index, value in (pinned_seats or {}).items():
        if not 0 <= pair_index < total_pairs:
            logger.debug("pinned team %s is outside a grid of %s teams", pair_index, total_pairs)
            continue
        fixed_in_pair = []
        for num in pinned_ids(value):
            person = _find_person(roster, num)
            if person is not None and person.id not in used_ids:
                fixed_in_pair.append(person)
                used_ids.add(person.id)
        if fixed_in_pair:
            pairs[pair_index] = fixed_in_pair

    for person_id, pair_index in pinned_people.items():
        if not 0 <= pair_index < total_pairs or pairs[pair_index]:
            continue
        person = _find_person(roster, person_id)
        if person is None or person.id in used_ids:
            continue
        pairs[pair_index] = [person]
        used_ids.add(person.id)

    unfixed = [s for s in roster if s.id not in used_ids]

    if sequential:
        queue = sorted(unfixed, key=_sort_key)
        idx = 0
        for pair in pairs:
            while len(pair) < 2 and idx < len(queue):
                pair.append(queue[idx])
                used_ids.add(queue[idx].id)
                idx += 1
        return pairs

    remaining = shuffled(unfixed, rng)
    males = shuffled([s for s in unfixed if s.gender == MALE], rng)
    females = shuffled([s for s in unfixed if s.gender == FEMALE], rng)

    for pair_index, pair in enumerate(pairs):
        while len(pair) < 2:
            person = _pick_partner(pair_order, pair_index, len(pair), males, females, remaining, used_ids, rng)
            if person is None:
                # anyone left, same gender or not
                person = _take_first(remaining, used_ids)
            if person is None:
                break
            pair.append(person)
            used_ids.add(person.id)

    leftovers = [s for s in roster if s.id not in used_ids]
    if leftovers:
        logger.debug("sweeping %s unplaced people into free seats", len(leftovers))
        idx = 0
        for pair in pairs:
            while len(pair) < 2 and idx < len(leftovers):
                pair.append(leftovers[idx])
                used_ids.add(leftovers[idx].id)
                idx += 1

    return pairs

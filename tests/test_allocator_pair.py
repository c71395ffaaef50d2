from __future__ import annotations

import random

import pytest

from seatplan.allocator import allocate_pair_seats, pair_capacity
from seatplan.models import ALTERNATE, FEMALE, FEMALE_LEFT, MALE, MALE_LEFT, PAIR_ORDERS, RANDOM, External, OddEven
from seatplan.roster import build_roster


def pair_ids(pairs):
    return [[p.id for p in pair] for pair in pairs]


def test_capacity_never_shrinks_below_roster():
    assert pair_capacity(10, 2, 1) == 5
    assert pair_capacity(9, 2, 1) == 5
    assert pair_capacity(4, 3, 2) == 6


def test_sequential_pairs_by_number_regardless_of_gender():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, MALE_LEFT, rows=2, sequential=True)
    assert pair_ids(pairs) == [[1, 2], [3, 4], [5, 6], [7, 8]]


def test_sequential_keeps_empty_teams():
    roster = build_roster(3, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, rows=2, sequential=True)
    assert pair_ids(pairs) == [[1, 2], [3], [], []]


def test_grid_grows_to_fit_everyone():
    roster = build_roster(10, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, rows=1)
    assert len(pairs) == 5
    assert sorted(p.id for pair in pairs for p in pair) == list(range(1, 11))


@pytest.mark.parametrize("pair_order", PAIR_ORDERS)
def test_every_policy_seats_everyone_once(pair_order):
    roster = build_roster(17, OddEven())
    for seed in range(20):
        pairs = allocate_pair_seats(roster, {}, 3, pair_order, rows=4, rng=random.Random(seed))
        assert len(pairs) == 12
        assert all(len(pair) <= 2 for pair in pairs)
        placed = [p.id for pair in pairs for p in pair]
        assert sorted(placed) == list(range(1, 18))


def test_male_left_puts_a_male_first():
    roster = build_roster(8, OddEven())
    for seed in range(10):
        pairs = allocate_pair_seats(roster, {}, 4, MALE_LEFT, rows=1, rng=random.Random(seed))
        assert [pair[0].gender for pair in pairs] == [MALE] * 4
        assert [pair[1].gender for pair in pairs] == [FEMALE] * 4


def test_female_left_puts_a_female_first():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {}, 4, FEMALE_LEFT, rows=1, rng=random.Random(4))
    assert [pair[0].gender for pair in pairs] == [FEMALE] * 4


def test_alternate_switches_per_team():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, ALTERNATE, rows=2, rng=random.Random(4))
    assert [pair[0].gender for pair in pairs] == [MALE, FEMALE, MALE, FEMALE]
    assert [pair[1].gender for pair in pairs] == [FEMALE, MALE, FEMALE, MALE]


def test_same_gender_pairs_when_one_gender_runs_out():
    roster = build_roster(8, External([(n, MALE if n <= 6 else FEMALE) for n in range(1, 9)]))
    pairs = allocate_pair_seats(roster, {}, 4, FEMALE_LEFT, rows=1, rng=random.Random(0))
    assert [pair[0].gender for pair in pairs] == [FEMALE, FEMALE, MALE, MALE]
    assert [pair[1].gender for pair in pairs] == [MALE, MALE, MALE, MALE]


def test_single_gender_roster_is_still_seated():
    roster = build_roster(4, External([(n, MALE) for n in range(1, 5)]))
    pairs = allocate_pair_seats(roster, {}, 2, MALE_LEFT, rows=1)
    assert sorted(p.id for pair in pairs for p in pair) == [1, 2, 3, 4]


def test_random_policy_is_repeatable_with_a_seed():
    roster = build_roster(12, OddEven())
    first = allocate_pair_seats(roster, {}, 3, RANDOM, rows=2, rng=random.Random(11))
    second = allocate_pair_seats(roster, {}, 3, RANDOM, rows=2, rng=random.Random(11))
    assert first == second


def test_pinned_team_keeps_both_people():
    roster = build_roster(8, OddEven())
    for _ in range(5):
        pairs = allocate_pair_seats(roster, {}, 2, pinned_seats={1: [3, 4]}, rows=2)
        assert pair_ids(pairs)[1] == [3, 4]


def test_pinned_team_accepts_a_single_id():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, pinned_seats={3: 5}, rows=2)
    assert pairs[3][0].id == 5
    assert len(pairs[3]) == 2


def test_pinned_teams_skip_ids_already_used():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {}, 2, pinned_seats={0: [3], 1: [3, 5]}, rows=2, sequential=True)
    assert pair_ids(pairs)[0][0] == 3
    assert pair_ids(pairs)[1][0] == 5
    assert [p.id for pair in pairs for p in pair].count(3) == 1


def test_pinned_person_needs_an_empty_team():
    roster = build_roster(8, OddEven())
    pairs = allocate_pair_seats(roster, {2: 0, 6: 3}, 2, pinned_seats={0: [1]}, rows=2)
    assert pairs[0][0].id == 1
    assert pairs[3][0].id == 6
    assert [p.id for pair in pairs for p in pair].count(2) == 1


def test_out_of_range_pins_are_ignored():
    roster = build_roster(4, OddEven())
    pairs = allocate_pair_seats(roster, {1: 50}, 1, pinned_seats={9: [2]}, rows=2, sequential=True)
    assert pair_ids(pairs) == [[1, 2], [3, 4]]

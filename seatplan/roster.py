from seatplan.models import FEMALE, MALE, External, OddEven, Person, Ranges
from seatplan.ranges import range_members
from seatplan.shuffle import shuffled


def build_roster(count, rule, randomize_ids=False, rng=None):
    """
    Build the list of people for one seating configuration.

    With randomize_ids the displayed ids are replaced by a random permutation
    while gender and original_number stay with the same person. An External
    roster is relabelled over 1..len(entries) whatever count says.
    """
    if isinstance(rule, External):
        people = [
            Person(id=entry.number, gender=entry.gender, original_number=entry.number)
            for entry in rule.entries
        ]
    else:
        people = []
        male_numbers = range_members(rule.male_ranges) if isinstance(rule, Ranges) else set()

        for num in range(1, count + 1):
            if isinstance(rule, Ranges):
                gender = MALE if num in male_numbers else FEMALE
            else:
                gender = MALE if num % 2 == 1 else FEMALE
            people.append(Person(id=num, gender=gender, original_number=num))

    if randomize_ids:
        numbers = shuffled(range(1, len(people) + 1), rng)
        people = [person._replace(id=number) for person, number in zip(people, numbers)]

    return people


def default_rule():
    return OddEven()

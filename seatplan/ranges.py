import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _to_int(text):
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


def parse_number_range(range_str):
    """
    Parse "1-5, 10, 15-18" into [1, 2, 3, 4, 5, 10, 15, 16, 17, 18].

    A bare token that is not a number yields None, which callers filter out.
    A range with an unparseable bound contributes nothing. Nothing is
    de-duplicated.
    """
    result = []

    for part in (p.strip() for p in range_str.split(",")):
        if "-" in part:
            bounds = part.split("-")
            start, end = _to_int(bounds[0]), _to_int(bounds[1])
            if start is None or end is None:
                continue
            result.extend(range(start, end + 1))
        else:
            result.append(_to_int(part))

    return result


def range_members(range_strs):
    members = set()
    for range_str in range_strs:
        members.update(n for n in parse_number_range(range_str) if n is not None)
    return members

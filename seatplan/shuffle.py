import random


def shuffled(items, rng=None):
    """Fisher-Yates over a copy of items; the caller's sequence is left alone."""
    rng = rng or random
    arr = list(items)

    for i in range(len(arr) - 1, 0, -1):
        j = rng.randint(0, i)
        arr[i], arr[j] = arr[j], arr[i]

    return arr

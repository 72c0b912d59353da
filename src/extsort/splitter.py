from .disk import open_file, create_file
from .tokens import read_ints, write_int


def split_ints(source, dest_a, dest_b):
    """
    Deals the integers of source out to dest_a and dest_b in turn, starting
    with dest_a. Both destinations are always created.

    Returns how many values went to each destination.
    """
    counts = [0, 0]
    with open_file(source) as fin, create_file(dest_a) as fa, create_file(dest_b) as fb:
        outputs = (fa, fb)
        active = 0
        for value in read_ints(fin):
            write_int(outputs[active], value)
            counts[active] += 1
            active ^= 1

    assert counts[0] - counts[1] in (0, 1)
    return counts[0], counts[1]

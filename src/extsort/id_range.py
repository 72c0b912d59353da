from collections import namedtuple


def ids_needed(length):
    """Temp-file IDs used by sorting length values, counting all recursion."""
    return max(0, 2 * length - 2)


class IdRange(namedtuple("IdRange", ["start", "budget"])):
    """
    The half-open interval [start, start + budget) of temp-file IDs one sort
    call may use for itself and its recursive calls. A budget of None means
    the range is unbounded above.
    """

    @property
    def end(self):
        if self.budget is None:
            return None
        return self.start + self.budget

    def __contains__(self, file_id):
        if file_id < self.start:
            return False
        return self.budget is None or file_id < self.end

    def covers(self, other):
        if other.start < self.start:
            return False
        if self.budget is None:
            return True
        return other.budget is not None and other.end <= self.end

    def carve(self, length):
        """
        Splits this range for sorting length values as two halves of
        ceil(length/2) and floor(length/2) values.

        Returns (left_file_id, left_range, right_file_id, right_range).
        The two temp files and the two child ranges are pairwise disjoint and
        together fill exactly [start, start + 2*length - 2).
        """
        assert length > 1
        n1 = (length + 1) // 2
        n2 = length // 2
        assert n1 + n2 == length and n1 >= n2

        left_file_id = self.start
        left = IdRange(self.start + 1, ids_needed(n1))
        right_file_id = left.end
        right = IdRange(right_file_id + 1, ids_needed(n2))

        assert right.end == self.start + ids_needed(length)
        assert self.budget is None or right.end <= self.end
        return left_file_id, left, right_file_id, right


def temp_ids(length, seed=0):
    """
    Yields every temp-file ID a sort of length values starting at seed uses,
    in the order the recursion allocates them.
    """
    if length <= 1:
        return
    left_file_id, left, right_file_id, right = IdRange(seed, ids_needed(length)).carve(length)
    yield left_file_id
    yield right_file_id
    yield from temp_ids((length + 1) // 2, left.start)
    yield from temp_ids(length // 2, right.start)

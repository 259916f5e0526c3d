"""
integer interval arithmetic used for genomic ranges (1-based, inclusive)
"""


class Interval:
    """
    a closed integer range
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the start of the interval (inclusive)
            end (int): the end of the interval (inclusive)

        Raises:
            AttributeError: if the start is greater than the end
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __and__(self, other):
        """the intersection of two intervals

        Example:
            >>> Interval(1, 10) & Interval(5, 50)
            Interval(5, 10)
            >>> Interval(1, 2) & Interval(10, 11)
            None
        """
        return Interval.intersection(self, other)

    def __or__(self, other):
        """the union of two intervals

        Example:
            >>> Interval(1, 10) | Interval(5, 50)
            Interval(1, 50)
        """
        return Interval.union(self, other)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    @classmethod
    def overlaps(cls, first, other):
        """
        checks if two intervals have any portion of their given ranges in common

        Args:
            first (Interval): an interval to be compared
            other (Interval): an interval to be compared

        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(5, 7))
            False
            >>> Interval.overlaps(Interval(1, 10), Interval(10, 11))
            True
            >>> Interval.overlaps((1, 10), (10, 11))
            True
        """
        if first[1] < other[0]:
            return False
        elif first[0] > other[1]:
            return False
        return True

    def __len__(self):
        """
        the length of the interval

        Example:
            >>> len(Interval(1, 11))
            11
        """
        return Interval.length(self)

    def length(self):
        return self[1] - self[0] + 1

    def __lt__(self, other):
        if self[0] < other[0]:
            return True
        elif self[0] == other[0] and self[1] < other[1]:
            return True
        return False

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return False

    def __contains__(self, other):
        try:
            if other[0] >= self[0] and other[1] <= self[1]:
                return True
        except TypeError:
            if other >= self[0] and other <= self[1]:
                return True
        return False

    def __hash__(self):
        return hash((self[0], self[1]))

    @classmethod
    def union(cls, *intervals):
        """
        returns the union of the set of input intervals

        Example:
            >>> Interval.union((1, 2), (4, 6), (4, 9), (20, 21))
            Interval(1, 21)
        """
        if len(intervals) < 1:
            raise AttributeError('cannot compute the union of an empty set of intervals')
        return Interval(min([i[0] for i in intervals]), max([i[1] for i in intervals]))

    @classmethod
    def intersection(cls, *intervals):
        """
        returns None if there is no intersection

        Example:
            >>> Interval.intersection((1, 10), (2, 8), (7, 15))
            Interval(7, 8)
            >>> Interval.intersection((1, 2), (5, 9))
            None
        """
        if len(intervals) < 1:
            raise AttributeError('cannot compute the intersection of an empty set of intervals')
        low = max([i[0] for i in intervals])
        high = min([i[1] for i in intervals])
        if low > high:
            return None
        return Interval(low, high)


def overlap_percent(first, other, denominator):
    """
    the overlap of two intervals as a percentage of some reference length. The overlap is measured as the distance
    between the inner boundaries (end - start) so two intervals sharing a single base have an overlap of 0

    Args:
        first (Interval): an interval to be compared
        other (Interval): an interval to be compared
        denominator (int): the reference length the overlap is measured against

    Returns:
        float: the overlap percentage, 0 if the intervals do not overlap

    Raises:
        ValueError: if the denominator is not a positive number

    Example:
        >>> overlap_percent((1, 100), (51, 200), 100)
        49.0
        >>> overlap_percent((1, 10), (20, 30), 100)
        0.0
    """
    if denominator <= 0:
        raise ValueError('the reference length of an overlap percentage must be positive', denominator)
    if not Interval.overlaps(first, other):
        return 0.0
    return (min(first[1], other[1]) - max(first[0], other[0])) / denominator * 100

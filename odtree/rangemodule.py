#!/usr/bin/env python3
"""Tracking of covered half-open ranges on top of an unbounded IntervalList."""
from .intervals import IntervalList, InvalidRange


class RangeModule(object):
    """
    Set of covered integer points, modified and queried by half-open ranges [left, right).

    Half-open ranges are translated to the closed ranges of IntervalList by decrementing the
    upper bound. Empty ranges (left >= right) raise InvalidRange.
    """

    def __init__(self):
        self.intervals = IntervalList.unbounded(False)

    @staticmethod
    def _closed(left, right):
        if not left < right:
            raise InvalidRange("Range [{}, {}) is empty.".format(left, right))
        return left, right - 1

    def add(self, left, right):
        """Mark [left, right) as covered."""
        self.intervals.assign(*self._closed(left, right), True)

    def remove(self, left, right):
        """Mark [left, right) as not covered."""
        self.intervals.assign(*self._closed(left, right), False)

    def query(self, left, right):
        """Return True if every point of [left, right) is covered."""
        covered = []
        self.intervals.query(*self._closed(left, right), lambda view: covered.append(view.value))
        return all(covered)

    def ranges(self):
        """Yield covered ranges as (left, right) tuples, ordered and with adjacent ones merged."""
        start = end = None
        for view in self.intervals:
            if not view.value:
                continue
            if start is not None and end == view.left:
                end = view.right + 1
                continue
            if start is not None:
                yield start, end
            start, end = view.left, view.right + 1
        if start is not None:
            yield start, end

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__,
                               ', '.join('[{}, {})'.format(l, r) for l, r in self.ranges()))

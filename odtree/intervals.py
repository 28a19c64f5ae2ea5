#!/usr/bin/env python3
'''
Ordered interval container ("old-driver tree").

The domain [min, max] is partitioned into closed, adjacent intervals, each carrying a value.
Intervals are kept in a singly-linked chain ordered by their left bound. Range assignment
coalesces everything it covers into a single node, which keeps the chain short as long as
assignments dominate the workload.
'''
from collections import namedtuple
import numbers

import sympy


class IntervalListError(Exception):
    '''Base class of all errors raised by IntervalList.'''


class PositionOutOfRange(IntervalListError, IndexError):
    '''Split position is outside of the domain.'''


class InvalidRange(IntervalListError, ValueError):
    '''Range with left > right.'''


class RangeOutOfBounds(IntervalListError, IndexError):
    '''Range reaches beyond the domain.'''


class InvalidChain(IntervalListError, ValueError):
    '''Seed chain does not form a gapless, ordered partition.'''


IntervalView = namedtuple('IntervalView', ['left', 'right', 'value'])
IntervalView.__doc__ = 'Read-only view of the closed interval [left, right] with its value.'


def _is_infinite(x):
    return getattr(x, 'is_infinite', False) is True


def _is_point(x):
    return isinstance(x, numbers.Integral) or getattr(x, 'is_Integer', False) is True


class IntervalNode(object):
    '''Closed interval [left, right] with a value and a link to the following interval.'''
    __slots__ = ['left', 'right', 'value', 'next']

    def __init__(self, left, right, value, next=None):
        self.left = left
        self.right = right
        self.value = value
        self.next = next

    def view(self):
        return IntervalView(self.left, self.right, self.value)

    def __repr__(self):
        return '{}({!r}, {!r}, {!r})'.format(
            self.__class__.__name__, self.left, self.right, self.value)


def create_default_node(value=0):
    '''Return a single node spanning the unbounded domain [-oo, oo].'''
    return IntervalNode(-sympy.oo, sympy.oo, value)


class IntervalList(object):
    '''
    Partition of [min, max] into valued intervals.

    Bounds are integers; unbounded domains use sympy.oo and -sympy.oo as sentinels. *min* and
    *max* are taken from the seed chain and never change afterwards.
    '''

    def __init__(self, head, sane=False):
        '''If *sane* is True (default: False), the seed chain will not be checked.'''
        self.head = head
        self.min = head.left
        last = head
        while last.next is not None:
            last = last.next
        self.max = last.right
        if not sane:
            self._check_chain()

    @classmethod
    def from_bounds(cls, left, right, value):
        '''Create container over [left, right] holding *value* everywhere.'''
        return cls(IntervalNode(left, right, value))

    @classmethod
    def unbounded(cls, value=0):
        '''Create container over [-oo, oo] holding *value* everywhere.'''
        return cls(create_default_node(value))

    def _check_chain(self):
        '''Raise InvalidChain if the chain breaks the partition invariants.'''
        node = self.head
        if node.left == sympy.oo:
            raise InvalidChain("Chain may not start at oo.")
        while node is not None:
            if not node.left <= node.right:
                raise InvalidChain("Interval {!r} has left > right.".format(node))
            if node.next is not None:
                if _is_infinite(node.right) or _is_infinite(node.next.left):
                    raise InvalidChain(
                        "Only the outermost bounds may be infinite, found {!r} followed by "
                        "{!r}.".format(node, node.next))
                if node.right + 1 != node.next.left:
                    raise InvalidChain("Intervals {!r} and {!r} are not adjacent.".format(
                        node, node.next))
            node = node.next

    def _check_range(self, left, right):
        if left > right:
            raise InvalidRange("Range [{}, {}] is invalid.".format(left, right))
        if left < self.min or right > self.max:
            raise RangeOutOfBounds("Range [{}, {}] is out of range [{}, {}].".format(
                left, right, self.min, self.max))
        for bound in (left, right):
            if not (_is_point(bound) or _is_infinite(bound)):
                raise RangeOutOfBounds("Range bound {!r} is not an integer.".format(bound))
        # infinities only close off the domain, nothing starts at oo or ends at -oo
        if left == sympy.oo or right == -sympy.oo:
            raise RangeOutOfBounds("Range [{}, {}] holds no point of the domain.".format(
                left, right))

    def _nodes(self):
        node = self.head
        while node is not None:
            yield node
            node = node.next

    def split(self, pos):
        '''
        Ensure an interval starts at *pos* and return that interval.

        The interval [left, right] containing *pos* is cut into [left, pos-1] and [pos, right].
        If an interval already starts at *pos*, nothing changes.
        '''
        if pos < self.min or pos > self.max:
            raise PositionOutOfRange("Position {} is out of range [{}, {}].".format(
                pos, self.min, self.max))
        if not (_is_point(pos) or _is_infinite(pos)):
            raise PositionOutOfRange("Position {!r} is not an integer.".format(pos))
        for node in self._nodes():
            if node.left == pos:
                return node
            if _is_infinite(pos):
                # oo is only a sentinel, intervals can not be cut there
                continue
            if node.left <= pos <= node.right:
                new_node = IntervalNode(pos, node.right, node.value, node.next)
                node.right = pos - 1
                node.next = new_node
                return new_node
        if _is_infinite(pos):
            raise PositionOutOfRange("Position {} is not a point of the domain.".format(pos))
        raise AssertionError("No interval contains position {}, chain is inconsistent.".format(
            pos))

    def _split_range(self, left, right):
        '''Split at *left* and behind *right*, return first node inside and first node after.'''
        left_node = self.split(left)
        right_node = None if right == self.max else self.split(right + 1)
        return left_node, right_node

    def assign(self, left, right, value):
        '''Replace everything within [left, right] by a single interval holding *value*.'''
        self._check_range(left, right)
        left_node, right_node = self._split_range(left, right)
        new_node = IntervalNode(left, right, value, right_node)

        if self.head is left_node:
            self.head = new_node
            return new_node
        pre_node = self.head
        while pre_node.next is not left_node:
            assert pre_node.next is not None, \
                "Predecessor of {!r} not found, chain is inconsistent.".format(left_node)
            pre_node = pre_node.next
        pre_node.next = new_node
        return new_node

    def transform(self, left, right, action):
        '''
        Set the value of every interval within [left, right] to *action(view)*.

        *action* is called once per interval, adjacent intervals are not merged afterwards.
        '''
        self._check_range(left, right)
        node, right_node = self._split_range(left, right)
        while node is not None and node is not right_node:
            node.value = action(node.view())
            node = node.next

    def query(self, left, right, read):
        '''
        Call *read(view)* for every interval intersecting [left, right].

        Views are clamped to [left, right], so together they cover exactly the queried range.
        Does not modify the chain.
        '''
        self._check_range(left, right)
        for node in self._nodes():
            if node.right < left:
                continue
            if node.left > right:
                break
            read(IntervalView(max(left, node.left), min(right, node.right), node.value))

    def __iter__(self):
        '''Iterate over views of all intervals.'''
        return (node.view() for node in self._nodes())

    def __len__(self):
        '''Returns number of intervals'''
        return sum(1 for _ in self._nodes())

    def __contains__(self, pos):
        '''Integer points of [min, max] are contained, the infinite sentinels are not.'''
        return _is_point(pos) and bool(self.min <= pos <= self.max)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__,
                               ', '.join('[{}, {}]={!r}'.format(*v) for v in self))

    def __eq__(self, other):
        if not isinstance(other, IntervalList):
            return NotImplemented
        return list(self) == list(other)

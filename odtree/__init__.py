"""Old-driver tree: an ordered interval container with range assignment."""
__version__ = '0.1.0'

from .intervals import (IntervalNode, IntervalView, IntervalList, create_default_node,
                        IntervalListError, PositionOutOfRange, InvalidRange, RangeOutOfBounds,
                        InvalidChain)
from .rangemodule import RangeModule

__all__ = ['IntervalNode', 'IntervalView', 'IntervalList', 'create_default_node',
           'IntervalListError', 'PositionOutOfRange', 'InvalidRange', 'RangeOutOfBounds',
           'InvalidChain', 'RangeModule']

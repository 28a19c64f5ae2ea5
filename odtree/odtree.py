#!/usr/bin/env python3
"""Comand line interface of odtree, replaying operation scenarios on an IntervalList."""
import sys
import argparse
import atexit
import math
import numbers
import operator

from ruamel.yaml import YAML
import sympy

from . import __version__
from .intervals import IntervalList, IntervalListError


# transform actions usable in scenario files, called with (old value, argument)
ACTIONS = {
    'add': operator.add,
    'multiply': operator.mul,
    'set': lambda value, argument: argument,
}


class VersionAction(argparse.Action):
    """Reimplementation of the version action, because argparse's version outputs to stderr."""
    def __init__(self, option_strings, version, dest=argparse.SUPPRESS,
                 default=argparse.SUPPRESS,
                 help="show program's version number and exit"):
        super(VersionAction, self).__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help)
        self.version = version

    def __call__(self, parser, namespace, values, option_string=None):
        print(parser.prog, self.version)
        parser.exit()


def is_finite(x):
    return getattr(x, 'is_infinite', False) is not True


def parse_bound(x):
    """
    Return integer or infinite bound from scenario value.

    Integers are taken as is, '-oo', 'oo', '-inf', 'inf' and YAML's .inf are turned into
    sympy infinities. Anything else raises ValueError.
    """
    if isinstance(x, bool):
        raise ValueError("Bound must be an integer or infinite, found {!r}.".format(x))
    if isinstance(x, int):
        return x
    if isinstance(x, float) and math.isinf(x):
        return sympy.oo if x > 0 else -sympy.oo
    if isinstance(x, str):
        s = x.strip().lower().replace('infinity', 'oo').replace('inf', 'oo')
        try:
            e = sympy.sympify(s)
        except (sympy.SympifyError, TypeError, SyntaxError):
            raise ValueError("Could not parse bound {!r}.".format(x))
        if e in (sympy.oo, -sympy.oo):
            return e
        if e.is_Integer:
            return int(e)
    raise ValueError("Bound must be an integer or infinite, found {!r}.".format(x))


def format_bound(x):
    """Return bound as it is written to YAML files."""
    return int(x) if is_finite(x) else str(x)


def weighted_sum(views):
    """Return sum of value*length over *views*, None if not numeric or not finite."""
    total = 0
    for view in views:
        if not (is_finite(view.left) and is_finite(view.right)):
            return None
        if isinstance(view.value, bool) or not isinstance(view.value, numbers.Number):
            return None
        total += view.value * (view.right - view.left + 1)
    return total


def load_scenario(stream):
    """Load scenario from YAML *stream* and return (IntervalList, operations)."""
    data = YAML(typ='safe').load(stream)
    if not isinstance(data, dict):
        raise ValueError("Scenario must be a mapping.")
    try:
        left, right = data['domain']
    except KeyError:
        raise ValueError("Scenario requires a 'domain' entry.")
    except (TypeError, ValueError):
        raise ValueError("Scenario 'domain' must be a list of two bounds.")
    operations = data.get('operations') or []
    if not isinstance(operations, list):
        raise ValueError("Scenario 'operations' must be a list.")
    left, right = parse_bound(left), parse_bound(right)
    if not left <= right:
        raise ValueError("Scenario domain [{}, {}] is empty.".format(left, right))
    return IntervalList.from_bounds(left, right, data.get('value', 0)), operations


def _unpack(params, count, name):
    if not isinstance(params, list) or len(params) != count:
        raise ValueError("{} requires a list of {} parameters, found {!r}.".format(
            name, count, params))
    return params


def _make_action(description):
    if not isinstance(description, dict) or len(description) != 1:
        raise ValueError("transform action must be a single entry mapping, found {!r}.".format(
            description))
    (name, argument), = description.items()
    if name not in ACTIONS:
        raise ValueError("Unknown transform action {!r}, valid options are {}.".format(
            name, ', '.join(sorted(ACTIONS))))
    func = ACTIONS[name]

    def action(view):
        try:
            return func(view.value, argument)
        except TypeError as e:
            raise ValueError("transform action {!r} can not be applied to value {!r} of "
                             "[{}, {}]: {}".format(description, view.value, view.left,
                                                   view.right, e))
    return action


def apply_operation(intervals, operation):
    """
    Apply a single scenario operation to *intervals*.

    Returns a result dictionary for query operations, None otherwise.
    """
    if not isinstance(operation, dict) or len(operation) != 1:
        raise ValueError("Operation must be a single entry mapping, found {!r}.".format(
            operation))
    (name, params), = operation.items()
    if name == 'split':
        intervals.split(parse_bound(params))
    elif name == 'assign':
        left, right, value = _unpack(params, 3, name)
        intervals.assign(parse_bound(left), parse_bound(right), value)
    elif name == 'transform':
        left, right, action = _unpack(params, 3, name)
        left, right, action = parse_bound(left), parse_bound(right), _make_action(action)
        # actions only look at values, a read-only pass leaves the chain intact on failure
        intervals.query(left, right, action)
        intervals.transform(left, right, action)
    elif name == 'query':
        left, right = [parse_bound(p) for p in _unpack(params, 2, name)]
        views = []
        intervals.query(left, right, views.append)
        return {'query': [left, right], 'intervals': views, 'sum': weighted_sum(views)}
    else:
        raise ValueError("Unknown operation {!r}, valid options are split, assign, transform "
                         "and query.".format(name))


def print_intervals(views, output_file=sys.stdout):
    for left, right, value in views:
        print('{:>20} {:>20}   {!r}'.format(str(left), str(right), value), file=output_file)


def print_query_result(result, output_file=sys.stdout):
    print('query [{}, {}]'.format(*result['query']), file=output_file)
    print_intervals(result['intervals'], output_file=output_file)
    if result['sum'] is not None:
        print('{:>20} {:>20}   {!r}'.format('', 'sum', result['sum']), file=output_file)


def dump_chain(intervals, stream):
    """Write chain of *intervals* to *stream* as YAML list."""
    yaml = YAML(typ='safe')
    yaml.default_flow_style = False
    yaml.dump([{'left': format_bound(v.left), 'right': format_bound(v.right), 'value': v.value}
               for v in intervals], stream)


def create_parser():
    """Return argparse parser."""
    parser = argparse.ArgumentParser(
        description='Replay split, assign, transform and query operations on an old-driver '
                    'tree and report the resulting intervals.')
    parser.add_argument('--version', action=VersionAction, version='{}'.format(__version__))
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increases verbosity level.')
    parser.add_argument('--output', '-o', metavar='YAML', type=argparse.FileType('w'),
                        help='Writes final intervals to YAML file.')
    parser.add_argument('scenario', metavar='FILE', type=argparse.FileType(),
                        help='YAML file with domain, initial value and operations.')
    return parser


def check_arguments(args, parser):
    """Register files for closing."""
    if args.output:
        atexit.register(args.output.close)
    if args.scenario:
        atexit.register(args.scenario.close)


def run(parser, args, output_file=sys.stdout):
    """Run command line interface."""
    try:
        intervals, operations = load_scenario(args.scenario)
    except ValueError as e:
        parser.error('{}: {}'.format(args.scenario.name, e))
    args.scenario.close()

    print('{:^80}'.format(' odtree '), file=output_file)
    print('{:<40}{:>40}'.format(args.scenario.name, '[{}, {}]'.format(
        intervals.min, intervals.max)), file=output_file)

    results = []
    for i, operation in enumerate(operations):
        if args.verbose > 1:
            print('{:-^80}'.format(' operation {}: {!r} '.format(i, operation)),
                  file=output_file)
        try:
            result = apply_operation(intervals, operation)
        except (ValueError, IntervalListError) as e:
            parser.error('operation {} ({!r}) failed: {}'.format(i, operation, e))
        if result is not None:
            print_query_result(result, output_file=output_file)
            results.append(result)
        if args.verbose > 0:
            print_intervals(intervals, output_file=output_file)

    print('{:-^80}'.format(' intervals ({}) '.format(len(intervals))), file=output_file)
    print_intervals(intervals, output_file=output_file)

    if args.output:
        dump_chain(intervals, args.output)
        args.output.close()
    return results


def main():
    """Initialize and run command line interface."""
    # Create and populate parser
    parser = create_parser()

    # Parse given arguments
    args = parser.parse_args()

    # Checking arguments
    check_arguments(args, parser)

    run(parser, args)


if __name__ == '__main__':
    main()

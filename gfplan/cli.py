#
# GFPlan - dive decompression planner.
#
# Copyright (C) 2026 by GFPlan Team
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

"""
GFPlan command line tool.

Calculate dive plan and print decompression stops, i.e.::

    $ gf-plan 30 30
    Dive: 30m for 30min, GF 30/85, ZH-L16B
    ...

The rich dive information records can be saved into a CSV file with
``--csv`` option.
"""

import argparse
import logging
import math
import sys

from . import calculate_plan, create
from .error import EngineError
from .flow import sender
from .model import TABLES
from .output import StepInfoGenerator, csv_writer

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """
    Parse command line arguments.

    :param argv: List of arguments, `sys.argv` by default.
    """
    parser = argparse.ArgumentParser(
        description='GFPlan - dive decompression planner'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', default=False,
        help='explain what is being done'
    )
    parser.add_argument(
        '-l', '--gf-low', dest='gf_low', default=0.3, type=float,
        help='gradient factor low parameter (default 0.3)'
    )
    parser.add_argument(
        '-g', '--gf-high', dest='gf_high', default=0.85, type=float,
        help='gradient factor high parameter (default 0.85)'
    )
    parser.add_argument(
        '-m', '--model', default='zh-l16b', choices=sorted(TABLES),
        help='Buhlmann coefficients table (default zh-l16b)'
    )
    parser.add_argument(
        '-6', '--last-stop-6m', dest='last_stop_6m', action='store_true',
        default=False, help='last decompression stop at 6m'
    )
    parser.add_argument(
        '--csv', dest='csv', default=None,
        help='save dive information records into CSV file'
    )
    parser.add_argument('depth', type=float, help='maximum dive depth [m]')
    parser.add_argument(
        'time', type=float, help='dive bottom time, including descent [min]'
    )
    return parser.parse_args(argv)


def print_plan(plan, model, f=None):
    """
    Print dive plan summary.

    :param plan: Dive plan.
    :param model: Name of Buhlmann coefficients table.
    :param f: File object.
    """
    if f is None:
        f = sys.stdout

    params = plan.dive_params
    print(
        'Dive: {:g}m for {:g}min, GF {:.0f}/{:.0f}, {}'.format(
            params.max_depth, params.bottom_time, params.gf_low * 100,
            params.gf_high * 100, model.upper()
        ),
        file=f
    )
    if plan.stops:
        print('Decompression stops:', file=f)
        for stop in plan.stops:
            print('  {:>4g}m {:>5g}min'.format(stop.depth, stop.time), file=f)
    else:
        print('No decompression stops', file=f)
    print('Descent time: {:.1f}min'.format(plan.t_descent), file=f)
    print(
        'Decompression time required: {:.1f}min'.format(plan.dtr), file=f
    )
    print('Total dive time: {:.1f}min'.format(plan.t_dive_total), file=f)


def main(argv=None, f=None):
    """
    Run the command line tool.

    Exit status is returned.

    :param argv: List of arguments, `sys.argv` by default.
    :param f: File object to print dive plan to, standard output by
        default.
    """
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level)

    engine = create()
    engine.table = TABLES[args.model]
    engine.last_stop_6m = args.last_stop_6m

    fcsv = None
    if args.csv:
        fcsv = open(args.csv, 'w', newline='')
        engine.calculate = sender(
            engine.calculate, StepInfoGenerator(engine, csv_writer(fcsv))
        )

    try:
        plan = calculate_plan(
            args.time, args.depth, args.gf_low, args.gf_high, engine=engine
        )
    except EngineError as ex:
        print('Error: {}'.format(ex), file=sys.stderr)
        return 1
    finally:
        if fcsv:
            fcsv.close()

    if math.isnan(plan.dtr):
        print(
            'Error: dive depth and bottom time have to be positive',
            file=sys.stderr
        )
        return 1

    print_plan(plan, args.model, f)
    return 0


# vim: sw=4:et:ai

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
GFPlan rich output classes, functions and coroutines.

The implemented coroutines

- convert dive step into rich dive information records
- saving rich dive information records in CSV file

Usage

    >>> import io
    >>> import gfplan
    >>> from gfplan.flow import sender
    >>> f = io.StringIO()
    >>> engine = gfplan.create()
    >>> engine.calculate = sender(
    ...     engine.calculate, StepInfoGenerator(engine, csv_writer(f))
    ... )
    >>> data = list(engine.calculate(30, 20))
    >>> f.getvalue().splitlines()[0]
    'depth,time,pressure,tissue_no,tissue_tension,tissue_m_value,gf,tissue_gf_m_value,tissue_ceiling,phase'
"""

from collections import namedtuple
import csv
import logging

from .ceiling import (
    get_interpolated_gf, get_m_value, get_modified_m_value, eq_gf_limit
)
from .flow import coroutine
from .pressure import depth_to_pressure

logger = logging.getLogger(__name__)


# InfoSample [1] --> [16] tissues: InfoTissue
InfoSample = namedtuple('InfoSample', 'depth time pressure tissues phase')
InfoTissue = namedtuple(
    'InfoTissue', 'no tension m_value gf gf_m_value ceiling'
)


class StepInfoGenerator(object):
    """
    Coroutine class to convert dive step into rich dive information
    records.

    Create coroutine object, then call it to start the coroutine.

    :var engine: Decompression planning engine.
    :var target: Coroutine to send dive information records to.
    """
    def __init__(self, engine, target):
        """
        Create the coroutine object.

        :param engine: Decompression planning engine.
        :param target: Coroutine to send dive information records to.
        """
        self.engine = engine
        self.target = target


    @coroutine
    def __call__(self):
        """
        Start the coroutine.
        """
        engine = self.engine
        target = self.target
        while True:
            step = yield
            params = engine.dive_params
            gf = get_interpolated_gf(
                step.depth, params.max_depth, params.gf_low, params.gf_high
            )
            p = depth_to_pressure(step.depth)

            tissues = tuple(
                InfoTissue(
                    k, t,
                    get_m_value(c.a, c.b, p),
                    gf,
                    get_modified_m_value(c.a, c.b, p, gf),
                    eq_gf_limit(gf, t, c.a, c.b),
                )
                for k, (t, c) in enumerate(zip(step.tensions, engine.table), 1)
            )
            sample = InfoSample(step.depth, step.time, p, tissues, step.phase)

            target.send(sample)


@coroutine
def csv_writer(f, target=None):
    """
    Write rich dive information records into a CSV file.

    :param f: File object.
    :param target: Optional coroutine to forward dive information records to.
    """
    header = [
        'depth', 'time', 'pressure', 'tissue_no', 'tissue_tension',
        'tissue_m_value', 'gf', 'tissue_gf_m_value', 'tissue_ceiling',
        'phase'
    ]

    fcsv = csv.writer(f, lineterminator='\n')
    fcsv.writerow(header)

    while True:
        sample = yield

        r1 = [sample.depth, sample.time, sample.pressure]
        for tissue in sample.tissues:
            r2 = [
                tissue.no, tissue.tension, tissue.m_value, tissue.gf,
                tissue.gf_m_value, tissue.ceiling, sample.phase
            ]
            fcsv.writerow(r1 + r2)

        if target:
            target.send(sample)


# vim: sw=4:et:ai

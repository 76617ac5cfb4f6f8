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
Basic Usage
-----------

The GFPlan dive decompression planner exports its main API via ``gfplan``
module.

Dive plan for a dive to 30 meters for 30 minutes on air, with gradient
factors 30/85, is calculated with :func:`~gfplan.calculate_plan`
function::

    >>> import gfplan
    >>> plan = gfplan.calculate_plan(30, 30, 0.3, 0.85)

The plan contains list of decompression stops::

    >>> plan.stops      # doctest:+ELLIPSIS
    [Stop(depth=..., time=..., saturated_compartments=(...))...]
    >>> plan.stops[-1].depth
    3

and timing information - descent time, total time of decompression stops,
decompression time required (time to the surface, including
decompression stops) and total dive time::

    >>> plan.t_descent
    1.5
    >>> plan.dtr > plan.t_stops > 0
    True
    >>> round(plan.t_dive_total - plan.dtr, 6)
    30.0

The history of a dive plan is the complete simulation trace - time,
depth and tension of each tissue compartment::

    >>> plan.history[0].time, plan.history[0].depth
    (0, 0)
    >>> len(plan.history[0].tensions)
    16

For invalid dive parameters, the decompression time required is not a
number and there are no decompression stops::

    >>> plan = gfplan.calculate_plan(0, 30, 0.3, 0.85)
    >>> plan.dtr
    nan
    >>> plan.stops
    []

Configuring Planner
-------------------
The planner engine can be configured before calculating a dive plan, i.e.
to use ZH-L16C coefficients and last decompression stop at 6m::

    >>> engine = gfplan.create()
    >>> engine.table = gfplan.ZH_L16C
    >>> engine.last_stop_6m = True
    >>> plan = gfplan.calculate_plan(30, 30, 0.3, 0.85, engine=engine)
    >>> plan.stops[-1].depth
    6

"""

import logging
import math

from .engine import Engine, DecoTable, DiveParams, Plan, Entry, Stop, \
    plan_summary
from .ceiling import CeilingValidator, get_m_value, get_modified_m_value, \
    get_interpolated_gf, is_safe_at_depth
from .model import ZH_L16B, ZH_L16C, update_tension, update_all_tensions
from .pressure import depth_to_pressure, depth_to_pn2
from .flow import sender

__version__ = '0.1.0'

logger = logging.getLogger(__name__)


def create(validate=True):
    """
    Create decompression planning engine.

    The dive step validation is enabled by default.

    Usage

    >>> import gfplan
    >>> engine = gfplan.create()
    >>> data = list(engine.calculate(30, 30))
    >>> engine.deco_table.total > 0
    True

    :param validate: Validate dive steps with ceiling validator.
    """
    engine = Engine()

    pipeline = []
    if validate:
        pipeline.append(CeilingValidator(engine))

    engine.calculate = sender(engine.calculate, *pipeline)

    return engine


def calculate_plan(bottom_time, max_depth, gf_low, gf_high, engine=None):
    """
    Calculate dive plan.

    If bottom time or maximum depth is not positive, then dive plan with
    decompression time required set to not a number is returned.

    :param bottom_time: Dive bottom time, including descent time [min].
    :param max_depth: Maximum depth [m].
    :param gf_low: Gradient factor low parameter.
    :param gf_high: Gradient factor high parameter.
    :param engine: Decompression planning engine, created with
        :func:`create` if null.
    """
    params = DiveParams(bottom_time, max_depth, gf_low, gf_high)
    if bottom_time <= 0 or max_depth <= 0:
        logger.debug('invalid dive parameters {}'.format(params))
        return Plan(math.nan, [], 0, 0, 0, [], params)

    if engine is None:
        engine = create()
    engine.gf_low = gf_low
    engine.gf_high = gf_high

    steps = list(engine.calculate(max_depth, bottom_time))
    return plan_summary(steps, engine.deco_table, params)


__all__ = [
    'create', 'calculate_plan', 'Engine', 'DecoTable', 'DiveParams', 'Plan',
    'Entry', 'Stop', 'ZH_L16B', 'ZH_L16C', 'depth_to_pressure',
    'depth_to_pn2', 'update_tension', 'update_all_tensions', 'get_m_value',
    'get_modified_m_value', 'get_interpolated_gf', 'is_safe_at_depth',
]

# vim: sw=4:et:ai

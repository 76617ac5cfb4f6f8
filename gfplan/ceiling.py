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
M-values, gradient factors and ascent ceiling.

M-value
-------
M-value is the maximum tension of a tissue compartment tolerated at
ambient pressure :math:`P`. The planner uses Workman's linear formula
with Buhlmann coefficients

    .. math::

        M = A + P / B

Gradient Factors
----------------
Gradient factor :math:`GF` by Erik Baker scales M-value down towards
ambient pressure

    .. math::

        M' = P + GF * (M - P)

For :math:`GF = 1` the modified M-value is equal to M-value, for
:math:`GF = 0` it is equal to ambient pressure.

The gradient factor changes linearly with depth. It has *gf low* value at
maximum depth of a dive and *gf high* value at the surface, so the deeper
the diver the more conservative the model is::

    >>> get_interpolated_gf(30, 30, 0.3, 0.85)
    0.3
    >>> get_interpolated_gf(0, 30, 0.3, 0.85)
    0.85

Ascent Ceiling
--------------
Solving :math:`T = M'` for ambient pressure gives the pressure of ascent
ceiling of a tissue compartment with tension :math:`T`

    .. math::

        P_l = (T - A * GF) / (GF / B + 1 - GF)

which is implemented by :py:func:`eq_gf_limit`. The planner checks
candidate depths with :py:func:`is_safe_at_depth` and the ceiling is
reported in rich dive output only.
"""

from collections import namedtuple
import logging

from .error import EngineError
from .flow import coroutine
from .model import ZH_L16B
from .pressure import depth_to_pressure, pressure_to_depth

logger = logging.getLogger(__name__)

Safe = namedtuple('Safe', 'is_safe sat_comp')
Safe.__doc__ = """
Result of depth safety check.

:var is_safe: True if no tissue compartment exceeds its modified M-value.
:var sat_comp: Index of first tissue compartment exceeding its modified
    M-value, -1 if depth is safe.
"""


def get_m_value(a, b, p):
    """
    Calculate M-value of a tissue compartment.

    :param a: Buhlmann coefficient A.
    :param b: Buhlmann coefficient B.
    :param p: Ambient pressure [bar].
    """
    return a + p / b


def get_modified_m_value(a, b, p, gf):
    """
    Calculate M-value of a tissue compartment scaled with gradient factor.

    Gradient factor value is not checked.

    :param a: Buhlmann coefficient A.
    :param b: Buhlmann coefficient B.
    :param p: Ambient pressure [bar].
    :param gf: Gradient factor value.
    """
    return p + gf * (get_m_value(a, b, p) - p)


def get_interpolated_gf(depth, max_depth, gf_low, gf_high):
    """
    Calculate gradient factor value at depth.

    Below maximum depth, gradient factor low value is returned.

    :param depth: Current depth [m].
    :param max_depth: Maximum depth of a dive [m].
    :param gf_low: Gradient factor low parameter.
    :param gf_high: Gradient factor high parameter.
    """
    if depth >= max_depth:
        return gf_low
    if depth <= 0:
        return gf_high
    return gf_high - (gf_high - gf_low) * depth / max_depth


def gf_m_values(depth, max_depth, gf_low, gf_high, table=ZH_L16B):
    """
    Calculate modified M-value of each tissue compartment at depth.

    Gradient factor is interpolated at the depth.

    .. seealso:: :py:func:`get_interpolated_gf`
    """
    gf = get_interpolated_gf(depth, max_depth, gf_low, gf_high)
    p = depth_to_pressure(depth)
    return tuple(get_modified_m_value(c.a, c.b, p, gf) for c in table)


def is_safe_at_depth(depth, tensions, max_depth, gf_low, gf_high, table=ZH_L16B):
    """
    Check if tissue compartments tolerate ambient pressure at depth.

    The tissue compartments are checked in table order, so the index of
    the fastest compartment exceeding its modified M-value is reported.

    :param depth: Depth to check [m].
    :param tensions: Tension of each tissue compartment [bar].
    :param max_depth: Maximum depth of a dive [m].
    :param gf_low: Gradient factor low parameter.
    :param gf_high: Gradient factor high parameter.
    :param table: Coefficients table.
    """
    limits = gf_m_values(depth, max_depth, gf_low, gf_high, table)
    for i, (t, m) in enumerate(zip(tensions, limits)):
        if t > m:
            return Safe(False, i)
    return Safe(True, -1)


def saturated_compartments(
        depth, tensions, max_depth, gf_low, gf_high, table=ZH_L16B):
    """
    Find all tissue compartments exceeding modified M-value at depth.

    Tuple of tissue compartment indexes is returned.

    .. seealso:: :py:func:`is_safe_at_depth`
    """
    limits = gf_m_values(depth, max_depth, gf_low, gf_high, table)
    return tuple(
        i for i, (t, m) in enumerate(zip(tensions, limits)) if t > m
    )


def eq_gf_limit(gf, tension, a, b):
    """
    Calculate ascent ceiling limit of a tissue compartment.

    The returned value is absolute pressure of depth of the ascent
    ceiling.

    :param gf: Gradient factor value.
    :param tension: Tension of tissue compartment [bar].
    :param a: Buhlmann coefficient A.
    :param b: Buhlmann coefficient B.
    """
    return (tension - a * gf) / (gf / b + 1 - gf)


def gf_limit(gf, tensions, table=ZH_L16B):
    """
    Calculate pressure of ascent ceiling for each tissue compartment.

    :param gf: Gradient factor value.
    :param tensions: Tension of each tissue compartment [bar].
    :param table: Coefficients table.
    """
    return tuple(
        eq_gf_limit(gf, t, c.a, c.b) for t, c in zip(tensions, table)
    )


def ceiling_depth(gf, tensions, table=ZH_L16B):
    """
    Calculate depth of ascent ceiling.

    The depth is the shallowest depth a diver can reach with given
    gradient factor value. Zero is returned if ascent to the surface is
    possible.

    :param gf: Gradient factor value.
    :param tensions: Tension of each tissue compartment [bar].
    :param table: Coefficients table.
    """
    limit = max(gf_limit(gf, tensions, table))
    return max(0, pressure_to_depth(limit))



class CeilingValidator(object):
    """
    Dive step ceiling validator (coroutine class).

    Create coroutine object, then call it to start the coroutine.

    :var engine: Decompression planning engine.
    """
    def __init__(self, engine):
        """
        Create coroutine object.

        :param engine: Decompression planning engine.
        """
        self.engine = engine


    @coroutine
    def __call__(self):
        """
        Start the coroutine.
        """
        logger.info('started ceiling validator')
        prev = None
        while True:
            step = yield
            self._ceiling_limit(step)
            self._time_order(prev, step)
            prev = step


    def _ceiling_limit(self, step):
        """
        Verify that a dive step does not violate modified M-value of any
        tissue compartment.

        :param step: Dive step to verify.
        """
        params = self.engine.dive_params
        safe = is_safe_at_depth(
            step.depth, step.tensions, params.max_depth, params.gf_low,
            params.gf_high, self.engine.table
        )
        if not safe.is_safe:
            raise EngineError(
                'Ceiling validation error at {} (compartment={})'
                .format(step, safe.sat_comp)
            )


    def _time_order(self, prev, step):
        """
        Verify that time of dive does not go backwards.

        :param prev: Previous dive step.
        :param step: Dive step to verify.
        """
        if prev is not None and step.time < prev.time:
            raise EngineError(
                'Dive step {} before previous dive step {}'.format(step, prev)
            )


# vim: sw=4:et:ai

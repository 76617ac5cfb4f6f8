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
Introduction
------------
The planner implements Buhlmann decompression model ZH-L16 with gradient
factors by Erik Baker. The model describes human body as 16 tissue
compartments. For inert gas (nitrogen, as the planner supports air only)
and for each compartment the model assigns the following parameters

half time
    Time for a compartment to close half of the gap between its inert
    gas pressure and pressure of inspired inert gas.
A
    Buhlmann coefficient A.
B
    Buhlmann coefficient B.

The coefficients are kept in tables of :py:class:`CoefficientPair`
records - :py:data:`ZH_L16B` (default) and :py:data:`ZH_L16C`. The tables
are tuples and shall never be modified.

.. _eq-haldane:

Haldane Equation
----------------
Inert gas pressure in a tissue compartment (tension) is calculated with
Haldane equation

    .. math::

        T_1 = T_0 + (P - T_0) * (1 - 2^{-t / T_{hl}})

where

:math:`T_0`
    Initial tension of inert gas in tissue compartment [bar].
:math:`P`
    Inspired inert gas pressure [bar], i.e. :math:`0.79 * P_{abs}` for air.
:math:`t`
    Time of exposure [min].
:math:`T_{hl}`
    Half time of the tissue compartment [min].

The same equation is used for gas uptake (:math:`P > T_0`) and gas
elimination (:math:`P < T_0`). The exposure is assumed to happen at
constant pressure, so dive phases with changing depth are simulated with
short time steps.

Example
~~~~~~~
At the surface all tissue compartments are equilibrated with inspired
nitrogen pressure of 0.79 bar. After 20 minutes at 30m (inspired nitrogen
pressure 3.16 bar), tension of the first compartment (half time 5
minutes) is

    .. math::

        T_1 = 0.79 + (3.16 - 0.79) * (1 - 2^{-20 / 5}) = 3.011875

    >>> from gfplan.pressure import depth_to_pn2
    >>> tensions = init_tensions()
    >>> tensions = update_all_tensions(tensions, depth_to_pn2(30), 20)
    >>> round(tensions[0], 6)
    3.011875
"""

from collections import namedtuple
import math

from .pressure import depth_to_pn2

LOG_2 = math.log(2)

CoefficientPair = namedtuple('CoefficientPair', 'half_time a b')
CoefficientPair.__doc__ = """
Buhlmann coefficients of a tissue compartment.

:var half_time: Nitrogen half time [min].
:var a: Buhlmann coefficient A.
:var b: Buhlmann coefficient B.
"""

# source: Buhlmann ZH-L16 tables, compartment 1b variant
ZH_L16B = (
    CoefficientPair(5.0, 1.1696, 0.5578),
    CoefficientPair(8.0, 1.0000, 0.6514),
    CoefficientPair(12.5, 0.8618, 0.7222),
    CoefficientPair(18.5, 0.7562, 0.7825),
    CoefficientPair(27.0, 0.6200, 0.8126),
    CoefficientPair(38.3, 0.5043, 0.8434),
    CoefficientPair(54.3, 0.4410, 0.8693),
    CoefficientPair(77.0, 0.4000, 0.8910),
    CoefficientPair(109.0, 0.3750, 0.9092),
    CoefficientPair(146.0, 0.3500, 0.9222),
    CoefficientPair(187.0, 0.3295, 0.9319),
    CoefficientPair(239.0, 0.3065, 0.9403),
    CoefficientPair(305.0, 0.2835, 0.9477),
    CoefficientPair(390.0, 0.2610, 0.9544),
    CoefficientPair(498.0, 0.2480, 0.9602),
    CoefficientPair(635.0, 0.2327, 0.9653),
)

# source: ostc firmware code
ZH_L16C = (
    CoefficientPair(4.0, 1.2599, 0.5050),
    CoefficientPair(8.0, 1.0000, 0.6514),
    CoefficientPair(12.5, 0.8618, 0.7222),
    CoefficientPair(18.5, 0.7562, 0.7825),
    CoefficientPair(27.0, 0.6200, 0.8126),
    CoefficientPair(38.3, 0.5043, 0.8434),
    CoefficientPair(54.3, 0.4410, 0.8693),
    CoefficientPair(77.0, 0.4000, 0.8910),
    CoefficientPair(109.0, 0.3750, 0.9092),
    CoefficientPair(146.0, 0.3500, 0.9222),
    CoefficientPair(187.0, 0.3295, 0.9319),
    CoefficientPair(239.0, 0.3065, 0.9403),
    CoefficientPair(305.0, 0.2835, 0.9477),
    CoefficientPair(390.0, 0.2610, 0.9544),
    CoefficientPair(498.0, 0.2480, 0.9602),
    CoefficientPair(635.0, 0.2327, 0.9653),
)

TABLES = {
    'zh-l16b': ZH_L16B,
    'zh-l16c': ZH_L16C,
}


def update_tension(t0, p_target, elapsed, half_time):
    """
    Calculate tension of a tissue compartment using Haldane equation.

    See :ref:`eq-haldane` section for details.

    :param t0: Initial tension [bar].
    :param p_target: Inspired inert gas pressure [bar].
    :param elapsed: Time of exposure [min].
    :param half_time: Half time of tissue compartment [min].
    """
    # 1 - 2^(-t/hl) without loss of precision for short exposures
    saturation = -math.expm1(-LOG_2 * elapsed / half_time)
    return t0 + (p_target - t0) * saturation


def update_all_tensions(tensions, p_target, elapsed, table=ZH_L16B):
    """
    Calculate tension of all tissue compartments.

    New tuple of tensions is returned, the input collection is not
    modified. `ValueError` is raised if number of tensions and number of
    tissue compartments in coefficients table differ.

    :param tensions: Tension of each tissue compartment [bar].
    :param p_target: Inspired inert gas pressure [bar].
    :param elapsed: Time of exposure [min].
    :param table: Coefficients table.
    """
    if len(tensions) != len(table):
        raise ValueError(
            'Expected {} tensions, got {}'.format(len(table), len(tensions))
        )
    return tuple(
        update_tension(t, p_target, elapsed, c.half_time)
        for t, c in zip(tensions, table)
    )


def init_tensions(table=ZH_L16B):
    """
    Create tensions of tissue compartments equilibrated at the surface.

    :param table: Coefficients table.
    """
    return (depth_to_pn2(0),) * len(table)


# vim: sw=4:et:ai

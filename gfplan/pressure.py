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
Depth, ambient pressure and inspired inert gas pressure conversions.

The planner assumes

- surface pressure is 1 bar
- change of 10m depth is change of 1 bar pressure
- breathing gas is air with 79% of nitrogen
- no water vapour pressure correction

For example, at 30m the ambient pressure is 4 bar and inspired nitrogen
pressure is 3.16 bar::

    >>> depth_to_pressure(30)
    4.0
    >>> round(depth_to_pn2(30), 2)
    3.16
"""

from .const import SURFACE_PRESSURE, METERS_PER_BAR, AIR_N2


def depth_to_pressure(depth):
    """
    Convert depth to absolute (ambient) pressure.

    :param depth: Depth [m].
    """
    return SURFACE_PRESSURE + depth / METERS_PER_BAR


def pressure_to_depth(abs_p):
    """
    Convert absolute pressure to depth.

    :param abs_p: Absolute pressure [bar].
    """
    return (abs_p - SURFACE_PRESSURE) * METERS_PER_BAR


def depth_to_pn2(depth):
    """
    Calculate inspired nitrogen pressure at depth when breathing air.

    :param depth: Depth [m].
    """
    return depth_to_pressure(depth) * AIR_N2


# vim: sw=4:et:ai

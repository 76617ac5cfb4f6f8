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
GFPlan constants.
"""

# surface pressure [bar]
SURFACE_PRESSURE = 1.0

# depth of sea water per 1 bar of pressure change [m/bar]
METERS_PER_BAR = 10.0

# fraction of nitrogen in air
AIR_N2 = 0.79

NUM_COMPARTMENTS = 16

# default descent and ascent rates [m/min]
DESCENT_RATE = 20.0
ASCENT_RATE = 10.0

# simulation time step [min]
TIME_STEP = 1

# decompression stops grid [m]
STOP_INTERVAL = 3
LAST_STOP_DEPTH = 3

SCALE = 10
EPSILON = 10 ** -SCALE

# vim: sw=4:et:ai

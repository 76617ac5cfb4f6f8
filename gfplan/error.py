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
GFPlan exceptions.
"""

class ConfigError(Exception):
    """
    Planner configuration error, i.e. non-positive ascent rate.
    """


class EngineError(Exception):
    """
    Decompression calculation error, i.e. decompression stop cannot be
    finished or dive step violates ascent ceiling.
    """


# vim: sw=4:et:ai

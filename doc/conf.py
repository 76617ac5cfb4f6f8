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

import sys
import os.path

import gfplan

sys.path.append(os.path.abspath('.'))
sys.path.append(os.path.abspath('doc'))

extensions = [
    'sphinx.ext.autodoc', 'sphinx.ext.doctest', 'sphinx.ext.viewcode',
    'sphinx.ext.mathjax'
]
project = 'gfplan'
source_suffix = '.rst'
master_doc = 'index'

version = release = gfplan.__version__
copyright = 'GFPlan Team'

epub_basename = 'gfplan - {}'.format(version)
epub_author = 'GFPlan Team'

html_theme = 'sphinx_rtd_theme'

# vim: sw=4:et:ai

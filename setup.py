#!/usr/bin/env python3
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

from setuptools import setup, find_packages

import gfplan

setup(
    name='gfplan',
    version=gfplan.__version__,
    description='GFPlan - dive decompression planner',
    author='GFPlan Team',
    packages=find_packages('.'),
    scripts=('bin/gf-plan',),
    include_package_data=True,
    long_description=\
"""\
GFPlan is Python dive decompression planner calculating decompression
stops of an air dive with Buhlmann ZH-L16 decompression model and Erik
Baker's gradient factors.
""",
    classifiers=[
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
    ],
    keywords='diving dive decompression gradient factors',
    license='GPL',
    install_requires=[],
    extras_require={
        'test': ['pytest'],
        'doc': ['sphinx', 'sphinx_rtd_theme'],
    },
)

# vim: sw=4:et:ai

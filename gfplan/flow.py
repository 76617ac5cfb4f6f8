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
GFPlan data flow processing functions and coroutines.

The planning engine produces dive steps with a generator. Additional
processing of dive steps, i.e. validation or saving into a file, is done
with coroutines attached to the generator with :py:func:`sender`.
"""

from functools import wraps


def coroutine(func):
    """
    Decorator for a coroutine function.

    The coroutine is advanced to its first ``yield`` expression, so it is
    ready to receive data.
    """
    @wraps(func)
    def start(*args, **kwargs):
        cr = func(*args, **kwargs)
        next(cr)
        return cr
    return start


@coroutine
def split(*targets):
    """
    Coroutine to forward received value to all target coroutines.

    :param targets: List of target coroutines.
    """
    while True:
        v = yield
        for t in targets:
            t.send(v)


def sender(gen, *factories):
    """
    Decorate generator function `gen` to send all its values to
    coroutines.

    The coroutines are created by calling each function from `factories`
    list when the decorated generator is started, so every call of the
    decorated function gets new set of coroutines.

    :param gen: Generator function.
    :param factories: List of functions creating coroutines.
    """
    @wraps(gen)
    def _send(*args, **kw):
        target = split(*[f() for f in factories])
        for v in gen(*args, **kw):
            target.send(v)
            yield v
    return _send


# vim: sw=4:et:ai

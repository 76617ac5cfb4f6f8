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
GFPlan decompression planning engine.

The engine simulates a dive as a sequence of dive steps. Each dive step
holds time, depth and tension of all tissue compartments. The dive
phases follow each other in fixed order

descent
    From the surface to maximum depth at descent rate.
bottom (``const`` phase)
    At maximum depth until bottom time is reached. Time of descent is
    part of the bottom time.
ceiling search
    The shallowest depth from the list of candidate depths (surface, last
    stop depth and each stop interval deeper), which can be reached
    without exceeding modified M-value of any tissue compartment during
    the ascent, is found. The diver ascends there, directly to the
    surface for no-decompression dive.
decompression stops
    The diver stays at a decompression stop until ascent to the next,
    shallower, candidate depth is safe, then ascends to that depth. This
    is repeated until the surface is reached. A decompression stop, which
    would never end, raises `EngineError`.

Dive steps are produced by a generator, so dive steps can be processed
(i.e. validated) as they are calculated. The decompression stops are
gathered in decompression table of the engine.

Usage

    >>> engine = Engine()
    >>> steps = list(engine.calculate(30, 30))
    >>> steps[0]
    Step(phase="start", time=0.0000, depth=0.0000)
    >>> steps[-1].depth
    0
    >>> engine.deco_table[-1].depth
    3
"""

from collections import namedtuple
import logging
import math

from .ceiling import is_safe_at_depth, saturated_compartments, \
    gf_m_values
from .error import ConfigError, EngineError
from .model import ZH_L16B, init_tensions, update_all_tensions
from .pressure import depth_to_pn2
from . import const

logger = logging.getLogger(__name__)

class Phase(object):
    """
    Dive phase enumeration.

    The dive phases are

    START
        Start of a dive. It happens at begining of the dive (time=0min,
        depth=0m). Only one dive step can exist with such dive phase.
    DESCENT
        Descent during dive - current dive step is deeper than previous one.
    CONST
        Constant depth during dive - the bottom part of a dive.
    ASCENT
        Ascent during dive - current dive step is shallower than previous
        one.
    DECO_STOP
        Decompression stop. Current dive step is at the same depth as
        previous one and ascent is not possible until allowed by
        decompression model.
    """
    START = 'start'
    DESCENT = 'descent'
    CONST = 'const'
    ASCENT = 'ascent'
    DECO_STOP = 'deco_stop'


Step = namedtuple('Step', 'phase time depth tensions')
Step.__repr__ = lambda s: 'Step(phase="{}", time={:.4f}, depth={:.4f})' \
    .format(s.phase, s.time, s.depth)
Step.__doc__ = """
Dive step information.

:var phase: Dive phase.
:var time: Time of dive [min].
:var depth: Depth [m].
:var tensions: Tension of each tissue compartment [bar].
"""

Entry = namedtuple('Entry', 'time depth tensions')
Entry.__doc__ = """
Dive profile snapshot stored in dive plan history.

:var time: Time of dive [min].
:var depth: Depth [m].
:var tensions: Tension of each tissue compartment [bar].
"""

Stop = namedtuple('Stop', 'depth time saturated_compartments')
Stop.__doc__ = """
Dive decompression stop information.

:var depth: Depth of decompression stop [m].
:var time: Length of decompression stop [min].
:var saturated_compartments: Indexes of tissue compartments, which did not
    allow to ascend when decompression stop started.
"""

DiveParams = namedtuple('DiveParams', 'bottom_time max_depth gf_low gf_high')
DiveParams.__doc__ = """
Dive parameters.

:var bottom_time: Bottom time including descent time [min].
:var max_depth: Maximum depth [m].
:var gf_low: Gradient factor low parameter.
:var gf_high: Gradient factor high parameter.
"""

Plan = namedtuple(
    'Plan', 'dtr stops t_descent t_dive_total t_stops history dive_params'
)
Plan.__doc__ = """
Dive plan.

:var dtr: Decompression time required - time to reach the surface after
    leaving the bottom, including decompression stops [min]. Not a number
    for invalid dive parameters.
:var stops: List of decompression stops.
:var t_descent: Time of descent [min].
:var t_dive_total: Total dive time [min].
:var t_stops: Total time of decompression stops [min].
:var history: List of dive profile snapshots.
:var dive_params: Dive parameters.
"""


class Engine(object):
    """
    GFPlan decompression planning engine.

    Use the engine to calculate dive profile and decompression stops.

    :var table: Buhlmann coefficients table.
    :var gf_low: Gradient factor low parameter.
    :var gf_high: Gradient factor high parameter.
    :var descent_rate: Descent rate during a dive [m/min].
    :var ascent_rate: Ascent rate during a dive [m/min].
    :var time_step: Time between dive steps [min].
    :var stop_interval: Distance between decompression stops [m].
    :var last_stop_6m: If true, then last deco stop is at 6m (not default
        3m).
    :var deco_table: List of decompression stops.
    :var dive_params: Parameters of currently calculated dive.
    """
    def __init__(self):
        super().__init__()
        self.table = ZH_L16B
        self.gf_low = 0.3
        self.gf_high = 0.85
        self.descent_rate = const.DESCENT_RATE
        self.ascent_rate = const.ASCENT_RATE
        self.time_step = const.TIME_STEP
        self.stop_interval = const.STOP_INTERVAL
        self.last_stop_6m = False
        self.deco_table = DecoTable()
        self.dive_params = None


    @property
    def last_stop_depth(self):
        """
        Depth of last decompression stop [m].
        """
        return 6 if self.last_stop_6m else const.LAST_STOP_DEPTH


    def _validate_config(self):
        """
        Validate engine configuration.

        `ConfigError` is raised if

        #. Descent or ascent rate is not positive.
        #. Time step is not positive.
        #. Stop interval is not positive.
        #. Last stop depth is not multiply of stop interval.
        """
        if self.descent_rate <= 0 or self.ascent_rate <= 0:
            raise ConfigError('Descent and ascent rates have to be positive')

        if self.time_step <= 0:
            raise ConfigError('Time step has to be positive')

        if self.stop_interval <= 0:
            raise ConfigError('Stop interval has to be positive')

        if self.last_stop_depth % self.stop_interval != 0:
            raise ConfigError(
                'Last stop depth {}m is not multiply of stop interval {}m'
                .format(self.last_stop_depth, self.stop_interval)
            )


    def _is_safe(self, depth, tensions):
        """
        Check if depth is safe for tissue compartments.

        :param depth: Depth to check [m].
        :param tensions: Tension of each tissue compartment [bar].
        """
        p = self.dive_params
        return is_safe_at_depth(
            depth, tensions, p.max_depth, p.gf_low, p.gf_high, self.table
        )


    def _trays(self, time):
        """
        Split time into trays of time step length.

        End time of each tray, relative to start, is returned. The last
        tray can be shorter than time step, i.e. for 2.5 minutes and time
        step of 1 minute::

            >>> engine = Engine()
            >>> list(engine._trays(2.5))
            [1, 2, 2.5]

        :param time: Time to split [min].
        """
        n = math.ceil(round(time / self.time_step, const.SCALE))
        yield from (k * self.time_step for k in range(1, n))
        if time > 0:
            yield time


    def _candidates(self, depth):
        """
        Calculate candidate depths of ascent, shallower than current depth.

        The candidates are surface, last decompression stop depth and every
        stop interval deeper. The candidates are returned in ascending
        order.

        :param depth: Current depth [m].
        """
        yield 0
        d = self.last_stop_depth
        while d < depth:
            yield d
            d += self.stop_interval


    def _next_depth(self, depth):
        """
        Find next, shallower, candidate depth.

        :param depth: Current depth [m].
        """
        return max(self._candidates(depth))


    def _step_start(self):
        """
        Create the very first dive step.

        The first step is at the surface with all tissue compartments
        equilibrated with surface pressure.
        """
        return Step(Phase.START, 0, 0, init_tensions(self.table))


    def _step_next(self, step, time, phase=Phase.CONST):
        """
        Calculate next dive step at constant depth and advanced by
        specified amount of time.

        :param step: Current dive step.
        :param time: Time spent at current depth [min].
        :param phase: Dive phase.
        """
        return self._step_next_depth(step, time, step.depth, phase)


    def _step_next_depth(self, step, time, depth, phase):
        """
        Calculate next dive step at depth and advanced by specified amount
        of time.

        The tissue compartments are loaded with inspired inert gas pressure
        of the new depth.

        :param step: Current dive step.
        :param time: Time of change from current dive step [min].
        :param depth: Depth of next dive step [m].
        :param phase: Dive phase.
        """
        tensions = update_all_tensions(
            step.tensions, depth_to_pn2(depth), time, self.table
        )
        time = round(step.time + time, const.SCALE)
        return Step(phase, time, depth, tensions)


    def _travel(self, start, depth, rate, phase):
        """
        Descend or ascend from starting dive step to destination depth.

        Dive step is created for each time step of the travel. The last
        dive step is returned as generator result.

        :param start: Starting dive step.
        :param depth: Destination depth [m].
        :param rate: Rate of depth change [m/min].
        :param phase: Dive phase.
        """
        step = start
        time = abs(depth - start.depth) / rate
        prev = 0
        for t in self._trays(time):
            # last tray ends exactly at destination depth
            d = depth if t == time else \
                start.depth + (depth - start.depth) * t / time
            step = self._step_next_depth(step, t - prev, d, phase)
            prev = t
            yield step
        return step


    def _dive_descent(self, start, depth):
        """
        Dive descent from the surface to maximum depth.

        :param start: Starting dive step.
        :param depth: Maximum depth [m].
        """
        step = yield from self._travel(
            start, depth, self.descent_rate, Phase.DESCENT
        )
        if __debug__:
            logger.debug('descent finished at {}'.format(step))
        return step


    def _dive_bottom(self, start, time):
        """
        Stay at maximum depth for specified amount of time.

        :param start: Starting dive step.
        :param time: Time at maximum depth [min].
        """
        step = start
        prev = 0
        for t in self._trays(time):
            step = self._step_next(step, t - prev)
            prev = t
            yield step
        return step


    def _can_ascend(self, start, depth):
        """
        Check if ascent from dive step to depth is safe.

        The ascent is simulated, so inert gas loaded during the ascent is
        taken into account. Every dive step of the ascent, including the
        arrival at the destination depth, has to be safe.

        :param start: Starting dive step.
        :param depth: Destination depth [m].
        """
        steps = self._travel(start, depth, self.ascent_rate, Phase.ASCENT)
        return all(self._is_safe(s.depth, s.tensions).is_safe for s in steps)


    def _ascent_saturated(self, start, depth):
        """
        Find tissue compartments not allowing to ascend from dive step to
        depth.

        Sorted tuple of tissue compartment indexes is returned.

        :param start: Starting dive step.
        :param depth: Destination depth [m].
        """
        p = self.dive_params
        steps = self._travel(start, depth, self.ascent_rate, Phase.ASCENT)
        saturated = set()
        for s in steps:
            saturated.update(saturated_compartments(
                s.depth, s.tensions, p.max_depth, p.gf_low, p.gf_high,
                self.table
            ))
        return tuple(sorted(saturated))


    def _stop_clears(self, stop_depth, depth):
        """
        Check if decompression stop ends in finite time.

        During a decompression stop, tension of each tissue compartment
        approaches inspired inert gas pressure at the stop. The stop ends
        if ascent to next depth is safe, with a margin, from the state of
        tissue compartments equilibrated at the stop.

        :param stop_depth: Depth of decompression stop [m].
        :param depth: Depth of next decompression stop or surface [m].
        """
        p = self.dive_params
        tensions = (depth_to_pn2(stop_depth),) * len(self.table)
        start = Step(Phase.DECO_STOP, 0, stop_depth, tensions)
        steps = self._travel(start, depth, self.ascent_rate, Phase.ASCENT)
        for s in steps:
            limits = gf_m_values(
                s.depth, p.max_depth, p.gf_low, p.gf_high, self.table
            )
            margin = (m - t for t, m in zip(s.tensions, limits))
            if min(margin) <= const.EPSILON:
                return False
        return True


    def _find_ceiling(self, step):
        """
        Find the shallowest candidate depth, which can be reached safely.

        Null is returned if there is no safe candidate depth.

        :param step: Current dive step.
        """
        for depth in self._candidates(step.depth):
            if self._can_ascend(step, depth):
                return depth

            if __debug__:
                logger.debug('ceiling search: {}m not safe'.format(depth))
        return None


    def _deco_stop(self, start, depth):
        """
        Execute decompression stop.

        The diver stays at the depth of starting dive step until ascent to
        next depth is safe. A decompression stop is added to the
        decompression table if the diver had to stay at the depth.

        `EngineError` is raised if the decompression stop never ends.

        The last dive step is returned as generator result.

        :param start: Starting dive step.
        :param depth: Depth of next decompression stop or surface [m].
        """
        step = start
        if self._can_ascend(step, depth):
            return step

        if not self._stop_clears(start.depth, depth):
            raise EngineError(
                'Decompression stop at {}m never ends, ascent to {}m is not'
                ' possible with the gradient factors'
                .format(start.depth, depth)
            )

        saturated = self._ascent_saturated(step, depth)
        if __debug__:
            logger.debug(
                'deco stop: at {}m, saturated compartments {}'
                .format(start.depth, saturated)
            )

        while not self._can_ascend(step, depth):
            step = self._step_next(step, self.time_step, Phase.DECO_STOP)
            yield step

        self.deco_table.append(start.depth, step.time - start.time, saturated)
        return step


    def _dive_ascent(self, start):
        """
        Dive ascent from the bottom to the surface.

        The ascent starts with ascent to the shallowest safe candidate
        depth, which is the surface for no-decompression dive. Then
        decompression stops are executed until the surface is reached.

        :param start: Starting dive step.
        """
        step = start
        depth = self._find_ceiling(step)
        if depth is None:
            if __debug__:
                logger.debug('ceiling search: at first deco stop already')
        else:
            step = yield from self._travel(
                step, depth, self.ascent_rate, Phase.ASCENT
            )
            if __debug__:
                logger.debug('ceiling search: ascent to {}m'.format(depth))

        while step.depth > 0:
            depth = self._next_depth(step.depth)
            step = yield from self._deco_stop(step, depth)
            step = yield from self._travel(
                step, depth, self.ascent_rate, Phase.ASCENT
            )

        if __debug__:
            logger.debug('surfaced at {}'.format(step))


    def calculate(self, depth, time):
        """
        Start dive profile calculation for specified dive depth and bottom
        time.

        The method returns an iterator of dive steps. The decompression
        table is available after the iterator is exhausted.

        :param depth: Maximum depth [m].
        :param time: Dive bottom time, including descent time [min].
        """
        self._validate_config()
        if depth <= 0 or time <= 0:
            raise EngineError('Dive depth and bottom time have to be positive')

        del self.deco_table[:]
        self.dive_params = DiveParams(time, depth, self.gf_low, self.gf_high)

        step = self._step_start()
        yield step

        step = yield from self._dive_descent(step, depth)

        t = time - step.time
        if t > 0:
            if __debug__:
                logger.debug(
                    'bottom time {}min (descent is {}min)'
                    .format(t, step.time)
                )
            step = yield from self._dive_bottom(step, t)
        elif __debug__:
            logger.debug(
                'no bottom time left after {}min descent'.format(step.time)
            )

        yield from self._dive_ascent(step)



class DecoTable(list):
    """
    Decompression table summary.

    The class is a list of decompression stops.

    The decompression stops time is in minutes.

    .. seealso:: :class:`gfplan.engine.Stop`
    """
    @property
    def total(self):
        """
        Total decompression time.
        """
        return round(sum(s.time for s in self), const.SCALE)


    def append(self, depth, time, saturated=()):
        """
        Add decompression stop.

        :param depth: Depth of decompression stop [m].
        :param time: Time of decompression stop [min].
        :param saturated: Indexes of saturated tissue compartments.
        """
        time = round(time, const.SCALE)
        stop = Stop(depth, time, tuple(saturated))

        assert stop.time > 0
        assert stop.depth > 0

        super().append(stop)
        if __debug__:
            logger.debug('deco table: added {}'.format(stop))



def plan_summary(steps, stops, dive_params):
    """
    Create dive plan from dive steps and decompression stops.

    :param steps: Collection of dive steps.
    :param stops: Collection of decompression stops.
    :param dive_params: Dive parameters.
    """
    bottom = (Phase.START, Phase.DESCENT, Phase.CONST)
    descent = [s.time for s in steps if s.phase == Phase.DESCENT]
    t_bottom = [s.time for s in steps if s.phase in bottom][-1]

    t_descent = descent[-1] if descent else 0
    t_dive_total = steps[-1].time
    t_stops = round(sum(s.time for s in stops), const.SCALE)
    dtr = round(t_dive_total - t_bottom, const.SCALE)
    history = [Entry(s.time, s.depth, s.tensions) for s in steps]

    return Plan(
        dtr, list(stops), t_descent, t_dive_total, t_stops, history,
        dive_params
    )


# vim: sw=4:et:ai

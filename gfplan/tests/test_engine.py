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
Tests for GFPlan decompression planning engine.
"""

from gfplan.ceiling import Safe, is_safe_at_depth
from gfplan.const import NUM_COMPARTMENTS
from gfplan.engine import Engine, DecoTable, Phase, Stop, Entry, \
    DiveParams, plan_summary
from gfplan.error import ConfigError, EngineError
from gfplan.model import ZH_L16C

from .tools import _step, _engine, SURFACE

import unittest
from unittest import mock

SAFE = Safe(True, -1)
UNSAFE = Safe(False, 0)


class EngineTestCase(unittest.TestCase):
    """
    GFPlan decompression planning engine tests.
    """
    def setUp(self):
        self.engine = _engine()


    def test_default_config(self):
        """
        Test default engine configuration
        """
        engine = Engine()
        self.assertEqual(20, engine.descent_rate)
        self.assertEqual(10, engine.ascent_rate)
        self.assertEqual(1, engine.time_step)
        self.assertEqual(3, engine.stop_interval)
        self.assertEqual(3, engine.last_stop_depth)
        self.assertEqual(0.3, engine.gf_low)
        self.assertEqual(0.85, engine.gf_high)


    def test_last_stop_6m(self):
        """
        Test last decompression stop at 6m
        """
        self.engine.last_stop_6m = True
        self.assertEqual(6, self.engine.last_stop_depth)


    def test_config_rates(self):
        """
        Test engine configuration validation (descent and ascent rate)
        """
        self.engine.ascent_rate = 0
        self.assertRaises(ConfigError, self.engine._validate_config)

        self.engine.ascent_rate = 10
        self.engine.descent_rate = -1
        self.assertRaises(ConfigError, self.engine._validate_config)


    def test_config_time_step(self):
        """
        Test engine configuration validation (time step)
        """
        self.engine.time_step = 0
        self.assertRaises(ConfigError, self.engine._validate_config)


    def test_config_stop_interval(self):
        """
        Test engine configuration validation (stop interval)
        """
        self.engine.stop_interval = 0
        self.assertRaises(ConfigError, self.engine._validate_config)

        # last stop at 3m is not at stop grid
        self.engine.stop_interval = 2
        self.assertRaises(ConfigError, self.engine._validate_config)


    def test_calculate_config_error(self):
        """
        Test engine configuration is validated before calculation
        """
        self.engine.time_step = -1
        with self.assertRaises(ConfigError):
            list(self.engine.calculate(30, 30))


    def test_calculate_invalid_dive(self):
        """
        Test dive calculation with non-positive depth or time
        """
        with self.assertRaises(EngineError):
            list(self.engine.calculate(0, 30))

        with self.assertRaises(EngineError):
            list(self.engine.calculate(30, -1))


    def test_trays(self):
        """
        Test splitting time into time step trays
        """
        self.assertEqual([1, 2, 2.5], list(self.engine._trays(2.5)))
        self.assertEqual([1, 2, 3], list(self.engine._trays(3)))
        self.assertEqual([0.3], list(self.engine._trays(0.3)))
        self.assertEqual([], list(self.engine._trays(0)))


    def test_trays_time_step(self):
        """
        Test splitting time into time step trays with custom time step
        """
        self.engine.time_step = 0.5
        self.assertEqual([0.5, 1.0, 1.2], list(self.engine._trays(1.2)))


    def test_candidates(self):
        """
        Test candidate depths of ascent
        """
        self.assertEqual([0, 3, 6, 9], list(self.engine._candidates(10)))
        self.assertEqual([0, 3, 6], list(self.engine._candidates(9)))
        self.assertEqual([0], list(self.engine._candidates(3)))


    def test_candidates_6m(self):
        """
        Test candidate depths of ascent with last stop at 6m
        """
        self.engine.last_stop_6m = True
        self.assertEqual([0, 6, 9], list(self.engine._candidates(12)))
        self.assertEqual([0], list(self.engine._candidates(6)))


    def test_next_depth(self):
        """
        Test next candidate depth
        """
        self.assertEqual(6, self.engine._next_depth(9))
        self.assertEqual(0, self.engine._next_depth(3))
        self.assertEqual(9, self.engine._next_depth(10))


    def test_step_start(self):
        """
        Test creation of initial dive step record
        """
        step = self.engine._step_start()
        self.assertEqual(Phase.START, step.phase)
        self.assertEqual(0, step.time)
        self.assertEqual(0, step.depth)
        self.assertEqual(SURFACE, step.tensions)


    def test_step_next(self):
        """
        Test creation of next dive step record
        """
        start = _step(Phase.DESCENT, 1.5, 30)
        step = self.engine._step_next(start, 20)
        self.assertEqual(Phase.CONST, step.phase)
        self.assertEqual(21.5, step.time)
        self.assertEqual(30, step.depth)
        self.assertAlmostEqual(3.011875, step.tensions[0], 6)


    def test_step_next_tables(self):
        """
        Test creation of next dive step record with ZH-L16C table
        """
        start = _step(Phase.DESCENT, 1.5, 30)
        step_b = self.engine._step_next(start, 20)
        self.engine.table = ZH_L16C
        step_c = self.engine._step_next(start, 20)
        self.assertTrue(step_c.tensions[0] > step_b.tensions[0])


    def test_travel_descent(self):
        """
        Test descent from the surface
        """
        start = self.engine._step_start()
        steps = list(self.engine._travel(start, 30, 20, Phase.DESCENT))

        self.assertEqual(2, len(steps))
        self.assertEqual([1, 1.5], [s.time for s in steps])
        self.assertAlmostEqual(20, steps[0].depth)
        self.assertEqual(30, steps[1].depth)
        self.assertTrue(all(s.phase == Phase.DESCENT for s in steps))
        self.assertTrue(
            all(t > 0.79 for t in steps[1].tensions), steps[1].tensions
        )


    def test_travel_ascent(self):
        """
        Test ascent by 3m
        """
        tensions = (2.0,) * NUM_COMPARTMENTS
        start = _step(Phase.DECO_STOP, 40, 9, tensions)
        steps = list(self.engine._travel(start, 6, 10, Phase.ASCENT))

        self.assertEqual(1, len(steps))
        step = steps[0]
        self.assertEqual(Phase.ASCENT, step.phase)
        self.assertEqual(40.3, step.time)
        self.assertEqual(6, step.depth)
        self.assertTrue(all(t < 2.0 for t in step.tensions))


    def test_travel_result(self):
        """
        Test travel returns last dive step
        """
        start = self.engine._step_start()
        gen = self.engine._travel(start, 10, 20, Phase.DESCENT)
        step = next(gen)
        with self.assertRaises(StopIteration) as ctx:
            next(gen)
        self.assertEqual(step, ctx.exception.value)


    def test_dive_bottom(self):
        """
        Test bottom part of a dive
        """
        start = _step(Phase.DESCENT, 1.5, 30)
        steps = list(self.engine._dive_bottom(start, 2.5))

        self.assertEqual([2.5, 3.5, 4], [s.time for s in steps])
        self.assertTrue(all(s.depth == 30 for s in steps))
        self.assertTrue(all(s.phase == Phase.CONST for s in steps))


    def test_can_ascend(self):
        """
        Test ascent check of every dive step of ascent
        """
        self.engine._is_safe = mock.MagicMock(return_value=SAFE)
        start = _step(Phase.CONST, 30, 30)

        self.assertTrue(self.engine._can_ascend(start, 10))
        args = [c[0][0] for c in self.engine._is_safe.call_args_list]
        self.assertEqual([20, 10], args)


    def test_can_ascend_arrival(self):
        """
        Test ascent check with unsafe arrival at destination depth
        """
        self.engine._is_safe = mock.MagicMock(side_effect=[SAFE, UNSAFE])
        start = _step(Phase.CONST, 30, 30)
        self.assertFalse(self.engine._can_ascend(start, 10))


    def test_can_ascend_gas_uptake(self):
        """
        Test ascent check with inert gas loaded during ascent

        The slowest compartment is within its limit at the surface at the
        start of the ascent, but it loads inert gas during 7 minutes of
        ascent from 72m.
        """
        engine = _engine(depth=72)
        tensions = SURFACE[:-1] + (1.2283,)
        start = _step(Phase.CONST, 5, 72, tensions)

        safe = is_safe_at_depth(0, tensions, 72, 0.3, 0.85)
        self.assertTrue(safe.is_safe)
        self.assertFalse(engine._can_ascend(start, 0))
        self.assertEqual((15,), engine._ascent_saturated(start, 0))


    @mock.patch('gfplan.engine.saturated_compartments')
    def test_ascent_saturated(self, f):
        """
        Test finding tissue compartments not allowing to ascend
        """
        f.side_effect = [(3,), (0, 3)]
        start = _step(Phase.CONST, 30, 30)

        self.assertEqual((0, 3), self.engine._ascent_saturated(start, 10))
        self.assertEqual(2, f.call_count)


    def test_stop_clears(self):
        """
        Test decompression stop ending in finite time
        """
        self.assertTrue(self.engine._stop_clears(3, 0))
        self.assertTrue(self.engine._stop_clears(6, 3))


    def test_stop_clears_low_gf_high(self):
        """
        Test decompression stop ending with low gradient factor high value
        """
        engine = _engine(gf_low=0.2, gf_high=0.3)
        self.assertTrue(engine._stop_clears(3, 0))


    def test_stop_clears_never(self):
        """
        Test decompression stop never ending
        """
        engine = _engine(gf_low=0, gf_high=0)
        self.assertFalse(engine._stop_clears(3, 0))
        self.assertTrue(engine._stop_clears(6, 3))


    def test_find_ceiling(self):
        """
        Test finding the shallowest safe candidate depth
        """
        self.engine._can_ascend = mock.MagicMock(
            side_effect=[False, False, True]
        )
        step = _step(Phase.CONST, 30, 30)
        depth = self.engine._find_ceiling(step)

        self.assertEqual(6, depth)
        args = [c[0][1] for c in self.engine._can_ascend.call_args_list]
        self.assertEqual([0, 3, 6], args)


    def test_find_ceiling_surface(self):
        """
        Test finding ceiling for no-decompression dive
        """
        self.engine._can_ascend = mock.MagicMock(return_value=True)
        step = _step(Phase.CONST, 30, 30)
        self.assertEqual(0, self.engine._find_ceiling(step))


    def test_find_ceiling_none(self):
        """
        Test finding ceiling when no candidate depth is safe
        """
        self.engine._can_ascend = mock.MagicMock(return_value=False)
        step = _step(Phase.ASCENT, 30, 6)
        self.assertIsNone(self.engine._find_ceiling(step))


    def test_deco_stop(self):
        """
        Test decompression stop
        """
        self.engine._can_ascend = mock.MagicMock(
            side_effect=[False, False, False, True]
        )
        self.engine._stop_clears = mock.MagicMock(return_value=True)
        self.engine._ascent_saturated = mock.MagicMock(return_value=(0, 1))
        start = _step(Phase.ASCENT, 32.4, 6)
        steps = list(self.engine._deco_stop(start, 3))

        self.assertEqual([33.4, 34.4], [s.time for s in steps])
        self.assertTrue(all(s.phase == Phase.DECO_STOP for s in steps))
        self.assertTrue(all(s.depth == 6 for s in steps))
        self.assertEqual([Stop(6, 2, (0, 1))], self.engine.deco_table)
        self.engine._stop_clears.assert_called_once_with(6, 3)


    def test_deco_stop_not_needed(self):
        """
        Test decompression stop when ascent is possible
        """
        self.engine._can_ascend = mock.MagicMock(return_value=True)
        start = _step(Phase.ASCENT, 32.4, 6)
        steps = list(self.engine._deco_stop(start, 3))

        self.assertEqual([], steps)
        self.assertEqual([], self.engine.deco_table)


    def test_deco_stop_never_ends(self):
        """
        Test decompression stop, which never ends
        """
        engine = _engine(gf_low=0, gf_high=0)
        start = _step(Phase.ASCENT, 32.4, 3, (1.2,) * NUM_COMPARTMENTS)

        with self.assertRaises(EngineError):
            list(engine._deco_stop(start, 0))


    def test_dive_ascent_ndl(self):
        """
        Test dive ascent directly to the surface
        """
        step = _step(Phase.CONST, 10, 10)
        steps = list(self.engine._dive_ascent(step))

        self.assertEqual([11], [s.time for s in steps])
        self.assertEqual(0, steps[-1].depth)
        self.assertEqual([], self.engine.deco_table)


    def test_dive_ascent_deco(self):
        """
        Test dive ascent with decompression stop
        """
        self.engine._find_ceiling = mock.MagicMock(return_value=3)
        self.engine._can_ascend = mock.MagicMock(
            side_effect=[False, False, False, True]
        )
        step = _step(Phase.CONST, 30, 30)
        steps = list(self.engine._dive_ascent(step))

        phases = [s.phase for s in steps]
        self.assertEqual(
            [Phase.ASCENT] * 3 + [Phase.DECO_STOP] * 2 + [Phase.ASCENT],
            phases
        )
        depths = [s.depth for s in steps]
        self.assertAlmostEqual(20, depths[0])
        self.assertAlmostEqual(10, depths[1])
        self.assertEqual([3, 3, 3, 0], depths[2:])
        self.assertEqual(1, len(self.engine.deco_table))
        self.assertEqual(3, self.engine.deco_table[0].depth)
        self.assertEqual(2, self.engine.deco_table[0].time)



class DecoTableTestCase(unittest.TestCase):
    """
    Decompression table tests.
    """
    def test_append(self):
        """
        Test adding decompression stops
        """
        dt = DecoTable()
        dt.append(6, 1, (0,))
        dt.append(3, 5.0000000000001)

        self.assertEqual([Stop(6, 1, (0,)), Stop(3, 5, ())], dt)


    def test_total(self):
        """
        Test total decompression time
        """
        dt = DecoTable()
        dt.append(9, 1)
        dt.append(6, 2)
        dt.append(3, 5)
        self.assertEqual(8, dt.total)



class PlanSummaryTestCase(unittest.TestCase):
    """
    Dive plan summary tests.
    """
    def test_summary(self):
        """
        Test dive plan creation from dive steps
        """
        steps = [
            _step(Phase.START, 0, 0),
            _step(Phase.DESCENT, 1, 20),
            _step(Phase.DESCENT, 1.5, 30),
            _step(Phase.CONST, 30, 30),
            _step(Phase.ASCENT, 32.4, 6),
            _step(Phase.DECO_STOP, 33.4, 6),
            _step(Phase.ASCENT, 33.7, 3),
            _step(Phase.DECO_STOP, 34.7, 3),
            _step(Phase.ASCENT, 35, 0),
        ]
        stops = [Stop(6, 1, (0,)), Stop(3, 1, (0, 1))]
        params = DiveParams(30, 30, 0.3, 0.85)

        plan = plan_summary(steps, stops, params)

        self.assertEqual(1.5, plan.t_descent)
        self.assertEqual(35, plan.t_dive_total)
        self.assertEqual(2, plan.t_stops)
        self.assertAlmostEqual(5, plan.dtr)
        self.assertEqual(stops, plan.stops)
        self.assertIsNot(stops, plan.stops)
        self.assertEqual(params, plan.dive_params)
        self.assertEqual(len(steps), len(plan.history))
        self.assertEqual(Entry(0, 0, SURFACE), plan.history[0])
        self.assertEqual(Entry(35, 0, SURFACE), plan.history[-1])


# vim: sw=4:et:ai

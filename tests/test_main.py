# test_main.py
import logging

import pytest

from main import run_loop
from particle import Bounds


class CountingSimulation:
    """Stands in for Simulation: one collision per tick, no physics."""
    def __init__(self):
        self.particles = []
        self.ticks = 0
        self.seen_bounds = []

    def tick(self, bounds):
        self.ticks += 1
        self.seen_bounds.append(bounds)
        return 1

    def total_kinetic_energy(self):
        return 0.0


class ScriptedVisualizer:
    """Reports fixed bounds and asks to quit after `frames` draws."""
    def __init__(self, frames=None):
        self.frames = frames
        self.draws = 0

    def current_bounds(self):
        return Bounds.centered(320, 240)

    def draw(self, particles):
        self.draws += 1
        return self.frames is None or self.draws < self.frames


def test_run_loop_stops_at_max_steps():
    sim, vis = CountingSimulation(), ScriptedVisualizer()
    steps = run_loop(sim, vis, {"max_steps": 5, "log_throttle_steps": 2})

    assert steps == 5
    assert sim.ticks == 5
    assert vis.draws == 5
    assert sim.seen_bounds == [Bounds.centered(320, 240)] * 5


def test_run_loop_stops_when_window_closes():
    sim, vis = CountingSimulation(), ScriptedVisualizer(frames=3)
    assert run_loop(sim, vis, {"max_steps": 0, "log_throttle_steps": 100}) == 3


def test_run_loop_resets_collision_count_each_log(caplog):
    caplog.set_level(logging.DEBUG)
    run_loop(CountingSimulation(), ScriptedVisualizer(), {"max_steps": 6, "log_throttle_steps": 2})

    counts = [r.getMessage() for r in caplog.records if "Collisions:" in r.getMessage()]
    assert len(counts) == 3
    assert all("Collisions: 2 " in message for message in counts)


def test_run_loop_with_real_simulation(sim_params):
    from simulation import Simulation

    vis = ScriptedVisualizer()
    sim = Simulation.from_config(sim_params, vis.current_bounds())
    try:
        assert run_loop(sim, vis, {"max_steps": 5, "log_throttle_steps": 2}) == 5
        assert sim.tick_count == 5
    finally:
        sim.close()

# simulation.py
"""
Handles the per-frame simulation step.

This module defines the Simulation class, which owns every particle and
advances the scene by one tick in two phases: each particle moves on its own,
then every overlapping pair is resolved in a fixed order.
"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List, Optional

import numpy as np

from particle import Particle, Bounds, spawn_particles

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, particles: List[Particle], params: Dict[str, Any]):
#     - Inputs:
#       - particles: The particles to simulate, in collision-sweep order.
#       - params: Dictionary of simulation parameters from config.json.
#         - "parallel_advance": bool
#     - Side Effects: Takes ownership of the particle list. Creates a thread
#       pool when parallel_advance is enabled.
#     - Invariants: Raises ValueError for an empty list or a non-positive radius.
#
#   - tick(self, bounds: Bounds) -> int:
#     - Outputs: Number of collisions resolved this tick.
#     - Side Effects: advance_all(bounds) runs to completion, then
#       resolve_all_collisions() sweeps pairs (i, j), i < j, ascending, once.
#     - Invariants: Particle count remains constant.


class Simulation:
    """
    Owns the particles and runs the two-phase tick.
    """
    def __init__(self, particles: List[Particle], params: Optional[Dict[str, Any]] = None):
        """
        Initializes the simulation.

        Args:
            particles (List[Particle]): The particles to simulate.
            params (Dict[str, Any]): Simulation parameters from config.
        """
        params = params if params is not None else {}

        # Rule 7: Enforce data contracts. Validate on initialization.
        if not particles:
            msg = "Configuration error: a simulation needs at least one particle."
            logging.critical(msg)
            raise ValueError(msg)
        for p in particles:
            if p.radius <= 0:
                msg = f"Configuration error: particle radius must be positive, got {p.radius}."
                logging.critical(msg)
                raise ValueError(msg)

        self.particles = list(particles)
        self.tick_count = 0

        self._executor = None
        if params.get('parallel_advance', False):
            workers = min(len(self.particles), os.cpu_count() or 1)
            self._executor = ThreadPoolExecutor(max_workers=workers)

        logging.info(
            f"Simulation initialized with {len(self.particles)} particles "
            f"(parallel_advance={self._executor is not None})."
        )

    @classmethod
    def from_config(cls, params: Dict[str, Any], bounds: Bounds) -> "Simulation":
        """
        Builds a simulation with freshly spawned particles.

        Rule 12: All randomness is controlled by a single master seed.
        """
        seed = params.get('seed')
        rng = np.random.default_rng(seed)
        logging.info(f"Simulation RNG initialized with seed: {seed}")
        return cls(spawn_particles(params, bounds, rng), params)

    def advance_all(self, bounds: Bounds) -> None:
        """
        Advances every particle. Returns only once all of them are done.
        """
        if self._executor is None:
            for p in self.particles:
                p.advance(bounds)
        else:
            # Consuming the iterator joins every task and re-raises failures.
            list(self._executor.map(lambda p: p.advance(bounds), self.particles))

    def resolve_all_collisions(self) -> int:
        """
        Resolves every overlapping pair once, in ascending (i, j) order.

        Corrections are cumulative, so a particle touching several others
        may still overlap afterwards; it is separated over later ticks.
        """
        collisions = 0
        count = len(self.particles)
        for i in range(count):
            for j in range(i + 1, count):
                if self.particles[i].resolve_collision(self.particles[j]):
                    collisions += 1
        return collisions

    def tick(self, bounds: Bounds) -> int:
        """
        Executes one time step of the simulation.
        """
        self.advance_all(bounds)
        collisions = self.resolve_all_collisions()
        self.tick_count += 1
        return collisions

    def total_kinetic_energy(self) -> float:
        """Sum of 0.5 * |v|^2 over all (unit-mass) particles."""
        return float(sum(0.5 * np.dot(p.velocity, p.velocity) for p in self.particles))

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

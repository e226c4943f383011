#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Molecular Dynamics Simulation Host
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         simulation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Host-side facade: builds the device, particle store and scheduler from a
configuration, seeds the lattice, and steps the pipeline. Energies and
temperature are computed on demand from the last completed step.
"""

import logging
import time
import numpy as np
from typing import Optional
from dataclasses import dataclass, field

from .device import ComputeDevice, DispatchError, DEFAULT_WORKGROUP_SIZE
from .lattice import create_fcc, create_fcc_lattice_2d
from .layout import ParticleLayout, PACKED_LAYOUT
from .physics import (
    PARAMETER_FIELDS,
    SimulationParameters,
    calculate_kinetic_energy,
    calculate_temperature,
    compute_potential_energy
)
from .scheduler import StepScheduler
from .store import ParticleStore, Buffering

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Snapshot of the simulation after a completed step."""
    positions: np.ndarray
    velocities: np.ndarray
    time: float = 0.0
    step: int = 0
    kinetic_energy: float = 0.0
    potential_energy: float = 0.0
    temperature: float = 0.0

    @property
    def total_energy(self) -> float:
        return self.kinetic_energy + self.potential_energy

    @property
    def n_particles(self) -> int:
        return self.positions.shape[0]


@dataclass
class SimulationConfig:
    """Configuration for the MD pipeline."""
    # Capacity and lattice
    max_num_particles: int = 256
    system_length: float = 4.8
    lattice_constant: float = 1.6
    dimensions: int = 3

    # Force law and time step
    params: SimulationParameters = field(default_factory=SimulationParameters)

    # Buffers and dispatch
    layout: ParticleLayout = PACKED_LAYOUT
    buffering: Buffering = Buffering.DOUBLE
    workgroup_size: int = DEFAULT_WORKGROUP_SIZE
    history_size: int = 64

    # Seed for initial velocities (None = nondeterministic)
    seed: Optional[int] = None


class MDSimulation:
    """
    Molecular dynamics pipeline host.

    Owns one compute device, one particle store and one step scheduler.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.device = ComputeDevice(
            workgroup_size=self.config.workgroup_size,
            history_size=self.config.history_size,
        )
        self.store = ParticleStore(
            self.device,
            self.config.max_num_particles,
            layout=self.config.layout,
            buffering=self.config.buffering,
        )
        self.scheduler = StepScheduler(self.device, self.store, self.config.params)
        self.initialized = False

        # Performance tracking
        self.steps_per_second = 0.0
        self._last_time = time.time()
        self._step_count = 0

    @property
    def params(self) -> SimulationParameters:
        return self.config.params

    @property
    def step_count(self) -> int:
        return self.scheduler.t

    @property
    def num_particles(self) -> int:
        return self.store.num_particles

    def initialize_lattice(self) -> int:
        """
        Seed the store with the configured lattice.

        Returns:
            Number of particles created
        """
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        particle_data = cfg.layout.allocate(cfg.max_num_particles)

        if cfg.dimensions == 2:
            n = create_fcc_lattice_2d(
                cfg.system_length, cfg.lattice_constant, particle_data, cfg.layout, rng
            )
        else:
            n = create_fcc(
                cfg.system_length, cfg.lattice_constant, particle_data, cfg.layout, rng
            )

        return self.load_particles(particle_data, n)

    def load_particles(self, particle_data: np.ndarray, num_particles: int) -> int:
        """Upload caller-built particles and reset the step counter."""
        self.store.fill(particle_data, num_particles)
        self.scheduler.t = 0
        self.initialized = True
        return num_particles

    def set_parameters(self, **changes) -> None:
        """
        Change simulation parameters between frames.

        The whole block is re-uploaded before the next step.
        """
        for name, value in changes.items():
            if name not in PARAMETER_FIELDS:
                raise AttributeError(f"Unknown simulation parameter: {name}")
            setattr(self.params, name, value)

    def step(self) -> int:
        """
        Advance one frame.

        Returns:
            Number of completed steps

        Raises:
            RuntimeError: If no particles were loaded
            DispatchError: If the device fails; the simulation cannot continue
        """
        if not self.initialized:
            raise RuntimeError("Simulation not initialized")

        try:
            t = self.scheduler.step()
        except DispatchError:
            logger.error(f"Step loop terminated at step {self.scheduler.t}")
            raise

        # Track performance
        self._step_count += 1
        if self._step_count % 100 == 0:
            current_time = time.time()
            elapsed = current_time - self._last_time
            if elapsed > 0:
                self.steps_per_second = 100.0 / elapsed
            self._last_time = current_time

        return t

    def run(self, n_steps: int) -> int:
        """Run simulation for n_steps."""
        for _ in range(n_steps):
            self.step()
        return self.step_count

    def render_buffer(self) -> np.ndarray:
        """Particle buffer holding the latest completed step."""
        return self.store.render_buffer(self.scheduler.t)

    def positions(self) -> np.ndarray:
        return self.store.positions(self.scheduler.t)

    def velocities(self) -> np.ndarray:
        return self.store.velocities(self.scheduler.t)

    def pair_separation(self, i: int = 0, j: int = 1) -> float:
        """Distance between particles i and j."""
        pos = self.positions()
        return float(np.linalg.norm(pos[j].astype(np.float64) - pos[i].astype(np.float64)))

    @property
    def state(self) -> SimulationState:
        """Snapshot with energies of the latest completed step."""
        positions = np.array(self.positions(), dtype=np.float64)
        velocities = np.array(self.velocities(), dtype=np.float64)
        p = self.params

        potential_energy = compute_potential_energy(positions, p.epsilon, p.sigma, p.cutoff)
        kinetic_energy = calculate_kinetic_energy(velocities)

        return SimulationState(
            positions=positions,
            velocities=velocities,
            time=self.scheduler.t * p.delta_t,
            step=self.scheduler.t,
            kinetic_energy=kinetic_energy,
            potential_energy=float(potential_energy),
            temperature=calculate_temperature(velocities, dimensions=self.config.dimensions),
        )

    def shutdown(self) -> None:
        """Release the device; later steps raise DeviceLostError."""
        self.device.destroy()


def create_fcc_simulation(
    system_length: float = 4.8,
    lattice_constant: float = 1.6,
    max_num_particles: int = 256,
    params: Optional[SimulationParameters] = None,
    buffering: Buffering = Buffering.DOUBLE,
    layout: ParticleLayout = PACKED_LAYOUT,
    dimensions: int = 3,
    seed: Optional[int] = None
) -> MDSimulation:
    """
    Create a simulation seeded with an FCC lattice.

    Args:
        system_length: Edge length of the lattice region
        lattice_constant: Unit cell edge length
        max_num_particles: Buffer capacity (must hold the lattice)
        params: Force law and time step (reduced-unit defaults if omitted)
        buffering: Ping-pong or in-place buffers
        layout: Particle record layout
        dimensions: 3 for FCC, 2 for the planar lattice
        seed: Seed for initial velocities

    Returns:
        Initialized MDSimulation
    """
    config = SimulationConfig(
        max_num_particles=max_num_particles,
        system_length=system_length,
        lattice_constant=lattice_constant,
        dimensions=dimensions,
        params=params or SimulationParameters(),
        layout=layout,
        buffering=buffering,
        seed=seed,
    )

    sim = MDSimulation(config)
    sim.initialize_lattice()

    return sim


def create_two_body_simulation(
    separation: float = 1.5,
    params: Optional[SimulationParameters] = None,
    buffering: Buffering = Buffering.DOUBLE,
    layout: ParticleLayout = PACKED_LAYOUT
) -> MDSimulation:
    """
    Create two particles at rest on the x axis.

    Args:
        separation: Initial distance between the particles
        params: Force law and time step
        buffering: Ping-pong or in-place buffers
        layout: Particle record layout

    Returns:
        Initialized MDSimulation
    """
    config = SimulationConfig(
        max_num_particles=2,
        params=params or SimulationParameters(),
        layout=layout,
        buffering=buffering,
    )
    sim = MDSimulation(config)

    particle_data = layout.allocate(2)
    layout.positions(particle_data)[1, 0] = separation
    sim.load_particles(particle_data, 2)

    return sim

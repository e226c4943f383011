#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Step Scheduler
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         scheduler.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Issues the per-frame kernel sequence.

Each step dispatches, in this order and with ceil(N / workgroup_size)
workgroups each:

    1. update_velocities
    2. update_positions
    3. calculate_forces

all against the bind group of parity t % 2, then advances t.
"""

from .device import ComputeDevice
from .physics import SimulationParameters
from .store import ParticleStore

STEP_PIPELINES = ("update_velocities", "update_positions", "calculate_forces")


class StepScheduler:
    """
    Drives the particle store through the three-kernel step.

    The parameter block is passed in explicitly and re-uploaded in full
    whenever it has changed since the last step.
    """

    def __init__(self, device: ComputeDevice, store: ParticleStore, params: SimulationParameters):
        self.device = device
        self.store = store
        self.params = params
        self.t = 0

    def workgroup_count(self, num_particles: int) -> int:
        return self.device.workgroup_count(num_particles)

    def sync_parameters(self) -> bool:
        """Upload the parameter block if dirty. Returns True if uploaded."""
        if self.params.consume_dirty():
            self.device.upload_parameters(self.params.as_array())
            return True
        return False

    def step(self) -> int:
        """
        Run one frame of the simulation.

        Returns:
            The step counter after this frame

        Raises:
            DispatchError: Propagated from the device, unrecoverable
        """
        self.sync_parameters()

        num_particles = self.store.num_particles
        if num_particles > 0:
            bind_group = self.store.bind_group(self.t)
            workgroups = self.workgroup_count(num_particles)
            for pipeline in STEP_PIPELINES:
                self.device.dispatch(pipeline, bind_group, workgroups, num_particles)

        self.t += 1
        return self.t

    def run(self, n_steps: int) -> int:
        """Run ``n_steps`` frames."""
        for _ in range(n_steps):
            self.step()
        return self.t

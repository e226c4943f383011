#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Particle Store
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         store.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Owns the particle buffers and the bind groups that pair them up.

Double buffering keeps two equally sized buffers A and B. Step t reads
buffer t % 2 and writes buffer (t + 1) % 2, so the buffer written at step t
is the one read at step t + 1. A consumer drawing frame t reads buffer
(t + 1) % 2 while step t + 1 only reads it.

Single buffering keeps one buffer that every kernel reads and writes in
place. This is safe because each pass writes only fields of its own
particle that no other worker of the same pass reads.

Buffers are allocated once at full capacity and never resized; only the
first ``num_particles`` records are live.
"""

import logging
import numpy as np
from enum import Enum
from typing import List

from .device import ComputeDevice, BindGroup
from .layout import ParticleLayout, PACKED_LAYOUT

logger = logging.getLogger(__name__)


class Buffering(Enum):
    """Buffer management schemes."""
    DOUBLE = "double"
    SINGLE = "single"


class ParticleStore:
    """
    Particle buffers for one simulation.

    Args:
        device: Device the buffers are bound on
        max_num_particles: Capacity of every buffer
        layout: Record layout shared with the kernels and consumers
        buffering: Ping-pong or in-place scheme
    """

    def __init__(
        self,
        device: ComputeDevice,
        max_num_particles: int,
        layout: ParticleLayout = PACKED_LAYOUT,
        buffering: Buffering = Buffering.DOUBLE
    ):
        self.device = device
        self.layout = layout
        self.buffering = Buffering(buffering)
        self.max_num_particles = max_num_particles
        self.num_particles = 0

        n_buffers = 2 if self.buffering is Buffering.DOUBLE else 1
        self.buffers: List[np.ndarray] = [
            layout.allocate(max_num_particles) for _ in range(n_buffers)
        ]
        self.bind_groups: List[BindGroup] = [
            BindGroup(
                params=device.param_buffer,
                src=self.buffers[i],
                dst=self.buffers[(i + 1) % n_buffers],
                layout=layout,
                label=f"particles[{i}->{(i + 1) % n_buffers}]",
            )
            for i in range(n_buffers)
        ]

        logger.info(
            f"Allocated {n_buffers} particle buffer(s) for {max_num_particles} particles "
            f"({layout.stride_bytes} bytes/particle)"
        )

    @property
    def double_buffered(self) -> bool:
        return self.buffering is Buffering.DOUBLE

    def fill(self, particle_data: np.ndarray, num_particles: int) -> None:
        """
        Upload the initial particles into every buffer.

        Args:
            particle_data: Flat buffer in ``self.layout``
            num_particles: Number of live particles it holds
        """
        count = num_particles * self.layout.stride
        for buffer in self.buffers:
            self.device.write_buffer(buffer, particle_data[:count])
        self.num_particles = num_particles

    def _parity(self, step: int) -> int:
        return step % len(self.buffers)

    def current(self, step: int) -> np.ndarray:
        """Buffer read at ``step``."""
        return self.buffers[self._parity(step)]

    def next(self, step: int) -> np.ndarray:
        """Buffer written at ``step``."""
        return self.buffers[self._parity(step + 1)]

    def bind_group(self, step: int) -> BindGroup:
        return self.bind_groups[self._parity(step)]

    def render_buffer(self, step: int) -> np.ndarray:
        """
        Buffer holding the results of the last completed step.

        Args:
            step: Number of steps completed so far

        Returns:
            Flat buffer a consumer may read until the next step completes
        """
        return self.current(step)

    def positions(self, step: int) -> np.ndarray:
        """Live positions after ``step`` completed steps (view)."""
        return self.layout.positions(self.render_buffer(step), self.num_particles)

    def velocities(self, step: int) -> np.ndarray:
        """Live velocities after ``step`` completed steps (view)."""
        return self.layout.velocities(self.render_buffer(step), self.num_particles)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Particle Buffer Layout
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         layout.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

A particle buffer is a flat float32 array holding one fixed-stride record
per particle. The same memory is read by the compute kernels and by any
consumer that draws the particles as instances, so both sides must agree on
the stride and field offsets. ParticleLayout is that single agreement.

Two layouts are provided:
    - PACKED_LAYOUT:  9 floats per particle, position @0, velocity @3
    - ALIGNED_LAYOUT: 12 floats per particle, position @0, velocity @4
      (every vec3 starts on a 16-byte boundary, as storage buffers require)
"""

import numpy as np
from typing import Tuple, List
from dataclasses import dataclass


@dataclass(frozen=True)
class ParticleLayout:
    """
    Stride and field offsets of one particle record.

    Offsets and stride are counted in elements of ``dtype``.
    """
    stride: int
    position_offset: int = 0
    velocity_offset: int = 3
    components: int = 3
    dtype: type = np.float32

    @property
    def itemsize(self) -> int:
        return np.dtype(self.dtype).itemsize

    @property
    def stride_bytes(self) -> int:
        return self.stride * self.itemsize

    def field_offset(self, name: str) -> int:
        """Element offset of the ``position`` or ``velocity`` field."""
        if name == "position":
            return self.position_offset
        if name == "velocity":
            return self.velocity_offset
        raise KeyError(f"Unknown particle field: {name}")

    def field_offset_bytes(self, name: str) -> int:
        return self.field_offset(name) * self.itemsize

    def allocate(self, capacity: int) -> np.ndarray:
        """Zeroed flat buffer large enough for ``capacity`` particles."""
        return np.zeros(capacity * self.stride, dtype=self.dtype)

    def capacity(self, buffer: np.ndarray) -> int:
        return buffer.shape[0] // self.stride

    def rows(self, buffer: np.ndarray, count: int = -1) -> np.ndarray:
        """
        View a flat buffer as a (count, stride) array.

        Args:
            buffer: Flat particle buffer
            count: Number of leading particles to expose (-1 for all)

        Returns:
            2D view sharing memory with ``buffer``
        """
        rows = buffer.reshape(-1, self.stride)
        if count >= 0:
            rows = rows[:count]
        return rows

    def positions(self, buffer: np.ndarray, count: int = -1) -> np.ndarray:
        """Nx3 strided view of particle positions (no copy)."""
        off = self.position_offset
        return self.rows(buffer, count)[:, off:off + self.components]

    def velocities(self, buffer: np.ndarray, count: int = -1) -> np.ndarray:
        """Nx3 strided view of particle velocities (no copy)."""
        off = self.velocity_offset
        return self.rows(buffer, count)[:, off:off + self.components]

    def vertex_attributes(self) -> List[Tuple[int, int, str]]:
        """
        Instance attributes for a renderer aliasing the particle buffer.

        Returns:
            List of (shader_location, offset_bytes, format)
        """
        fmt = f"float{8 * self.itemsize}x{self.components}"
        return [
            (0, self.field_offset_bytes("position"), fmt),
            (1, self.field_offset_bytes("velocity"), fmt),
        ]


PACKED_LAYOUT = ParticleLayout(stride=9, position_offset=0, velocity_offset=3)
ALIGNED_LAYOUT = ParticleLayout(stride=12, position_offset=0, velocity_offset=4)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Particle Update Kernels
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         kernels.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

The three compute kernels of one simulation step, written as Numba
parallel loops over workgroups. Invocation ``i`` of workgroup ``g`` handles
particle ``g * workgroup_size + i``; invocations past ``num_particles`` do
nothing.

Every kernel shares one signature so the device can dispatch them alike:

    kernel(params, src, dst, num_particles,
           position_offset, velocity_offset, workgroup_size, num_workgroups)

``params`` is the packed [delta_t, epsilon, sigma, cutoff] block. ``src``
is the read buffer and ``dst`` the write buffer, both viewed as
(capacity, stride) arrays; in single-buffer mode they are the same array.

Step order is fixed: update_velocities, update_positions, calculate_forces.
Each worker writes only its own particle, and calculate_forces reads
positions while writing velocities, so no pass reads what another worker
of the same pass writes.
"""

import numpy as np
from numba import jit, prange

from .physics import lennard_jones_force_magnitude


@jit(nopython=True, parallel=True, cache=True)
def update_velocities(
    params, src, dst, num_particles,
    position_offset, velocity_offset, workgroup_size, num_workgroups
):
    """
    Carry velocities into the write buffer.

    Identity stage: the force from the previous step is already folded into
    the velocity. This slot is where a leapfrog half-kick would go.
    """
    for group in prange(num_workgroups):
        for local in range(workgroup_size):
            i = group * workgroup_size + local
            if i >= num_particles:
                continue
            for c in range(3):
                dst[i, velocity_offset + c] = src[i, velocity_offset + c]


@jit(nopython=True, parallel=True, cache=True)
def update_positions(
    params, src, dst, num_particles,
    position_offset, velocity_offset, workgroup_size, num_workgroups
):
    """Advance positions: x_next = x + v_next * Δt."""
    delta_t = params[0]

    for group in prange(num_workgroups):
        for local in range(workgroup_size):
            i = group * workgroup_size + local
            if i >= num_particles:
                continue
            for c in range(3):
                dst[i, position_offset + c] = (
                    src[i, position_offset + c] + dst[i, velocity_offset + c] * delta_t
                )


@jit(nopython=True, parallel=True, cache=True)
def calculate_forces(
    params, src, dst, num_particles,
    position_offset, velocity_offset, workgroup_size, num_workgroups
):
    """
    Apply the net Lennard-Jones force to every particle's velocity.

    Reads the freshly integrated positions from ``dst`` and sums pair forces
    over all other particles with 0 < r < cutoff (dense O(N²) scan, one
    worker per particle). The net force becomes a velocity increment
    Δv = F Δt for unit mass. Positions are left untouched.
    """
    delta_t = params[0]
    epsilon = params[1]
    sigma = params[2]
    cutoff = params[3]
    cutoff_sq = cutoff * cutoff

    for group in prange(num_workgroups):
        for local in range(workgroup_size):
            i = group * workgroup_size + local
            if i >= num_particles:
                continue

            xi = dst[i, position_offset]
            yi = dst[i, position_offset + 1]
            zi = dst[i, position_offset + 2]

            fx = 0.0
            fy = 0.0
            fz = 0.0

            for j in range(num_particles):
                if j == i:
                    continue

                dx = dst[j, position_offset] - xi
                dy = dst[j, position_offset + 1] - yi
                dz = dst[j, position_offset + 2] - zi
                r_sq = dx * dx + dy * dy + dz * dz

                if r_sq > 0.0 and r_sq < cutoff_sq:
                    r = np.sqrt(r_sq)
                    f_mag = lennard_jones_force_magnitude(r, epsilon, sigma)

                    # Repulsion pushes i away from j
                    fx -= f_mag * dx / r
                    fy -= f_mag * dy / r
                    fz -= f_mag * dz / r

            dst[i, velocity_offset] += fx * delta_t
            dst[i, velocity_offset + 1] += fy * delta_t
            dst[i, velocity_offset + 2] += fz * delta_t


PIPELINES = {
    "update_velocities": update_velocities,
    "update_positions": update_positions,
    "calculate_forces": calculate_forces,
}

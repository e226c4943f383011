#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
FCC Lattice Initial Conditions
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         lattice.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Seeds the simulation with a non-overlapping face-centered-cubic arrangement.

A cubic region of side ``system_length`` holds n = system_length / a unit
cells per axis (a = lattice constant), each with four basis points:

    (0, 0, 0), (1/2, 1/2, 0), (1/2, 0, 1/2), (0, 1/2, 1/2)

giving 4n³ particles. When system_length is not a multiple of a, n is
truncated and the partial outer shell is left empty.

Positions are a pure function of (system_length, a). Velocities are drawn
uniformly from [-0.1, 0.1) per axis.
"""

import logging
import numpy as np
from typing import Optional

from .layout import ParticleLayout, PACKED_LAYOUT

logger = logging.getLogger(__name__)

FCC_BASIS = np.array([
    [0.0, 0.0, 0.0],
    [0.5, 0.5, 0.0],
    [0.5, 0.0, 0.5],
    [0.0, 0.5, 0.5],
])

# Planar analogue: a square cell with a centred point and two edge midpoints
SQUARE_BASIS = np.array([
    [0.0, 0.0],
    [0.5, 0.5],
    [0.5, 0.0],
    [0.0, 0.5],
])

VELOCITY_SCALE = 0.1


def cells_per_side(system_length: float, lattice_constant: float) -> int:
    """
    Number of whole unit cells along one axis.

    The ratio is truncated; a tiny relative tolerance keeps exact multiples
    such as 0.3 / 0.1 from losing a cell to float round-off.
    """
    ratio = system_length / lattice_constant
    return int(np.floor(ratio * (1.0 + 1e-9)))


def fcc_positions(system_length: float, lattice_constant: float) -> np.ndarray:
    """
    Generate FCC lattice sites.

    Args:
        system_length: Edge length of the cubic region
        lattice_constant: Unit cell edge length

    Returns:
        (4n³)x3 array of positions, ordered by cell (i, j, k) then basis point
    """
    n = cells_per_side(system_length, lattice_constant)
    positions = np.zeros((4 * n ** 3, 3))

    idx = 0
    for i in range(n):
        for j in range(n):
            for k in range(n):
                cell = np.array([i, j, k], dtype=np.float64)
                for basis in FCC_BASIS:
                    positions[idx] = (cell + basis) * lattice_constant
                    idx += 1

    return positions


def square_lattice_positions(system_length: float, lattice_constant: float) -> np.ndarray:
    """Planar variant of fcc_positions: (4n²)x3 sites in the z = 0 plane."""
    n = cells_per_side(system_length, lattice_constant)
    positions = np.zeros((4 * n ** 2, 3))

    idx = 0
    for i in range(n):
        for j in range(n):
            for basis in SQUARE_BASIS:
                positions[idx, 0] = (i + basis[0]) * lattice_constant
                positions[idx, 1] = (j + basis[1]) * lattice_constant
                idx += 1

    return positions


def random_velocities(
    count: int,
    rng: Optional[np.random.Generator] = None,
    scale: float = VELOCITY_SCALE,
    dimensions: int = 3
) -> np.ndarray:
    """
    Draw small random initial velocities.

    Each active component is 2 * (U(0,1) - 0.5) * scale. Components beyond
    ``dimensions`` are zero.

    Args:
        count: Number of particles
        rng: Random generator (a fresh unseeded one if omitted)
        scale: Half-width of the uniform interval
        dimensions: 2 for planar systems, 3 otherwise

    Returns:
        count x 3 array of velocities
    """
    if rng is None:
        rng = np.random.default_rng()

    velocities = np.zeros((count, 3))
    velocities[:, :dimensions] = 2.0 * (rng.random((count, dimensions)) - 0.5) * scale
    return velocities


def _write_particles(
    positions: np.ndarray,
    velocities: np.ndarray,
    particle_data: np.ndarray,
    layout: ParticleLayout
) -> int:
    count = positions.shape[0]
    layout.positions(particle_data, count)[:] = positions
    layout.velocities(particle_data, count)[:] = velocities
    return count


def create_fcc(
    system_length: float,
    lattice_constant: float,
    particle_data: np.ndarray,
    layout: ParticleLayout = PACKED_LAYOUT,
    rng: Optional[np.random.Generator] = None
) -> int:
    """
    Fill a particle buffer with an FCC lattice and random velocities.

    The buffer must hold at least 4n³ particles; this is not checked.

    Args:
        system_length: Edge length of the cubic region
        lattice_constant: Unit cell edge length
        particle_data: Flat particle buffer to write into
        layout: Record layout of ``particle_data``
        rng: Random generator for the velocities

    Returns:
        Number of particles written (4n³)
    """
    positions = fcc_positions(system_length, lattice_constant)
    velocities = random_velocities(positions.shape[0], rng)
    count = _write_particles(positions, velocities, particle_data, layout)

    logger.info(
        f"Created {count} particles on a {cells_per_side(system_length, lattice_constant)}³ FCC lattice"
    )
    return count


def create_fcc_lattice_2d(
    system_length: float,
    lattice_constant: float,
    particle_data: np.ndarray,
    layout: ParticleLayout = PACKED_LAYOUT,
    rng: Optional[np.random.Generator] = None
) -> int:
    """
    Fill a particle buffer with the planar four-point lattice.

    Same contract as create_fcc with 4n² particles, z = 0 and vz = 0.
    """
    positions = square_lattice_positions(system_length, lattice_constant)
    velocities = random_velocities(positions.shape[0], rng, dimensions=2)
    count = _write_particles(positions, velocities, particle_data, layout)

    logger.info(
        f"Created {count} particles on a {cells_per_side(system_length, lattice_constant)}² planar lattice"
    )
    return count

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Lennard-Jones Physics
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

This module holds the simulation parameters and the Lennard-Jones law used
by the force kernel, plus energy diagnostics for the host side.

The potential is:
    V(r) = 4ε [(σ/r)¹² - (σ/r)⁶]

and the force magnitude along the pair axis:
    F(r) = -dV/dr = 24ε/r [2(σ/r)¹² - (σ/r)⁶]

Positive F is repulsive, negative F attractive. Pairs at r >= cutoff do not
interact. Masses are 1 throughout.
"""

import numpy as np
from numba import jit, prange
from typing import Optional
from dataclasses import dataclass, field

PARAMETER_FIELDS = ("delta_t", "epsilon", "sigma", "cutoff", "rotate_camera")


@dataclass
class SimulationParameters:
    """
    Physical constants of the force law and integrator.

    Default values are in reduced units (σ = ε = m = 1). The cutoff is an
    absolute distance. Values are not validated; keep them positive and
    ``cutoff`` above ``sigma``.

    Assigning any field marks the block dirty so the next step re-uploads
    it to the compute device.
    """
    delta_t: float = 0.005     # Time step
    epsilon: float = 1.0       # Potential well depth
    sigma: float = 1.0         # Zero-crossing distance
    cutoff: float = 2.5        # Interaction cutoff distance
    rotate_camera: bool = False  # Only read by the renderer
    _dirty: bool = field(default=True, init=False, repr=False, compare=False)

    def __setattr__(self, name, value):
        object.__setattr__(self, name, value)
        if name in PARAMETER_FIELDS:
            object.__setattr__(self, "_dirty", True)

    @classmethod
    def argon(cls, scale_factor: float = 500.0) -> "SimulationParameters":
        """
        Argon-like constants scaled into scene units.

        σ = 3.405 Å and a cutoff of 2.5σ, both divided by ``scale_factor``;
        ε is 1 / scale_factor².
        """
        return cls(
            delta_t=0.01,
            epsilon=1.0 / (scale_factor * scale_factor),
            sigma=3.405 / scale_factor,
            cutoff=(2.5 * 3.405) / scale_factor,
        )

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def r_min(self) -> float:
        """Distance at potential minimum: r_min = 2^(1/6) * σ ≈ 1.122σ"""
        return self.sigma * (2.0 ** (1.0 / 6.0))

    def as_array(self) -> np.ndarray:
        """Pack the parameter block as [delta_t, epsilon, sigma, cutoff]."""
        return np.array(
            [self.delta_t, self.epsilon, self.sigma, self.cutoff],
            dtype=np.float32
        )

    def consume_dirty(self) -> bool:
        """Return the dirty flag and clear it."""
        was_dirty = self._dirty
        object.__setattr__(self, "_dirty", False)
        return was_dirty


@jit(nopython=True, cache=True)
def lennard_jones_potential(r: float, epsilon: float, sigma: float) -> float:
    """
    Calculate the Lennard-Jones potential energy.

    V(r) = 4ε [(σ/r)¹² - (σ/r)⁶]

    Args:
        r: Distance between particles
        epsilon: Potential well depth
        sigma: Zero-crossing distance

    Returns:
        Potential energy (0 for coincident particles)
    """
    if r <= 0.0:
        return 0.0

    sr6 = (sigma / r) ** 6
    sr12 = sr6 * sr6
    return 4.0 * epsilon * (sr12 - sr6)


@jit(nopython=True, cache=True)
def lennard_jones_force_magnitude(r: float, epsilon: float, sigma: float) -> float:
    """
    Calculate the magnitude of the Lennard-Jones force.

    F(r) = -dV/dr = 24ε/r [2(σ/r)¹² - (σ/r)⁶]

    Positive values indicate repulsion, negative indicate attraction.
    Coincident particles (r = 0) exert no force on each other.

    Args:
        r: Distance between particles
        epsilon: Potential well depth
        sigma: Zero-crossing distance

    Returns:
        Force magnitude (positive = repulsive)
    """
    if r <= 0.0:
        return 0.0

    sr6 = (sigma / r) ** 6
    sr12 = sr6 * sr6
    return 24.0 * epsilon / r * (2.0 * sr12 - sr6)


@jit(nopython=True, parallel=True, cache=True)
def compute_potential_energy(
    positions: np.ndarray,
    epsilon: float,
    sigma: float,
    cutoff: float
) -> float:
    """
    Total potential energy over all pairs closer than the cutoff.

    Dense O(N²) pair sum, each pair counted once. No periodic images.

    Args:
        positions: Nx3 array of particle positions
        epsilon: LJ epsilon parameter
        sigma: LJ sigma parameter
        cutoff: Absolute cutoff distance

    Returns:
        Total potential energy
    """
    n_particles = positions.shape[0]
    cutoff_sq = cutoff * cutoff
    potential_energy = 0.0

    for i in prange(n_particles):
        for j in range(i + 1, n_particles):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            r_sq = dx * dx + dy * dy + dz * dz

            if r_sq > 0.0 and r_sq < cutoff_sq:
                potential_energy += lennard_jones_potential(np.sqrt(r_sq), epsilon, sigma)

    return potential_energy


def calculate_kinetic_energy(velocities: np.ndarray, masses: Optional[np.ndarray] = None) -> float:
    """
    Calculate total kinetic energy.

    KE = Σ (1/2) m v²

    Args:
        velocities: Nx3 array of velocities
        masses: Optional array of masses (default: all 1.0)

    Returns:
        Total kinetic energy
    """
    if masses is None:
        masses = np.ones(velocities.shape[0])

    v_sq = np.sum(np.asarray(velocities, dtype=np.float64) ** 2, axis=1)
    return float(0.5 * np.sum(masses * v_sq))


def calculate_temperature(
    velocities: np.ndarray,
    n_dof: Optional[int] = None,
    dimensions: int = 3
) -> float:
    """
    Calculate temperature from velocities using equipartition theorem.

    In reduced units where k_B = 1 and m = 1:
    T = 2 KE / n_dof

    Args:
        velocities: Nx3 array of velocities
        n_dof: Degrees of freedom (default: dimensions * (N - 1), fixed COM)
        dimensions: Number of active spatial dimensions

    Returns:
        Temperature in reduced units
    """
    n_particles = velocities.shape[0]

    if n_dof is None:
        n_dof = dimensions * n_particles - dimensions

    if n_dof <= 0:
        return 0.0

    kinetic_energy = calculate_kinetic_energy(velocities)
    return 2.0 * kinetic_energy / n_dof

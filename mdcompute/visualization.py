#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Diagnostic Plots
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Matplotlib plots for inspecting a run:
- Particle projection read straight from a particle buffer via its layout
- Energy vs time
- Pair separation vs time for two-body runs
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
from typing import Tuple, Optional, Sequence
from dataclasses import dataclass

from .layout import ParticleLayout, PACKED_LAYOUT


def create_speed_colormap():
    """
    Create a colormap for particle speed.

    Blue (slow) -> Cyan -> Green -> Yellow -> Red (fast)
    """
    colors = [
        (0.0, 0.0, 0.5),
        (0.0, 0.5, 1.0),
        (0.0, 1.0, 1.0),
        (0.0, 1.0, 0.0),
        (1.0, 1.0, 0.0),
        (1.0, 0.5, 0.0),
        (1.0, 0.0, 0.0),
    ]
    return LinearSegmentedColormap.from_list("speed", colors, N=256)


SPEED_CMAP = create_speed_colormap()


@dataclass
class VisualizationConfig:
    """Configuration for diagnostic plots."""
    marker_size: float = 30.0
    max_speed: float = 0.2          # Speed mapped to the top of the colormap
    projection: Tuple[int, int] = (0, 1)  # Axes shown (0=x, 1=y, 2=z)
    background_color: str = "#1a1a2e"
    figsize: Tuple[int, int] = (8, 8)


def calculate_particle_colors(velocities: np.ndarray, config: VisualizationConfig) -> np.ndarray:
    """Nx4 RGBA colors by speed."""
    speeds = np.sqrt(np.sum(np.asarray(velocities, dtype=np.float64) ** 2, axis=1))
    return SPEED_CMAP(np.clip(speeds / config.max_speed, 0, 1))


def render_particle_buffer(
    buffer: np.ndarray,
    num_particles: int,
    layout: ParticleLayout = PACKED_LAYOUT,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render particles straight from a particle buffer.

    Args:
        buffer: Flat particle buffer
        num_particles: Live particles in ``buffer``
        layout: Record layout of ``buffer``
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    return render_particles_matplotlib(
        layout.positions(buffer, num_particles),
        layout.velocities(buffer, num_particles),
        config,
        ax,
    )


def render_particles_matplotlib(
    positions: np.ndarray,
    velocities: np.ndarray,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render a 2D projection of the particles, colored by speed.

    Args:
        positions: Nx3 array of positions
        velocities: Nx3 array of velocities
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=config.figsize)
    else:
        fig = ax.figure

    ax.clear()
    ax.set_facecolor(config.background_color)

    a, b = config.projection
    ax.scatter(
        positions[:, a], positions[:, b],
        s=config.marker_size,
        c=calculate_particle_colors(velocities, config),
        edgecolors='white',
        linewidths=0.3,
        alpha=0.9
    )

    labels = "xyz"
    ax.set_xlabel(labels[a])
    ax.set_ylabel(labels[b])
    ax.set_aspect('equal')

    return fig


def render_energy_plot(
    times: Sequence[float],
    kinetic: Sequence[float],
    potential: Sequence[float],
    total: Sequence[float],
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render energy vs time plot.

    Args:
        times: Time array
        kinetic: Kinetic energy array
        potential: Potential energy array
        total: Total energy array
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    ax.clear()
    ax.plot(times, kinetic, 'r-', label='Kinetic', linewidth=1.5)
    ax.plot(times, potential, 'b-', label='Potential', linewidth=1.5)
    ax.plot(times, total, 'k-', label='Total', linewidth=2)

    ax.set_xlabel('Time')
    ax.set_ylabel('Energy')
    ax.set_title('Energy vs Time')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig


def render_separation_plot(
    times: Sequence[float],
    separations: Sequence[float],
    r_min: Optional[float] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render pair separation vs time, with the potential minimum marked.

    Args:
        times: Time array
        separations: Pair distance at each time
        r_min: Optional distance of the potential minimum
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    ax.clear()
    ax.plot(times, separations, 'b-', linewidth=1.5, label='Separation')
    if r_min is not None:
        ax.axhline(y=r_min, color='red', linestyle='--', alpha=0.5, label='r_min')

    ax.set_xlabel('Time')
    ax.set_ylabel('Distance')
    ax.set_title('Pair Separation vs Time')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig

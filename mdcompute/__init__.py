#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Parallel Lennard-Jones Particle Pipeline
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Description:    Data-parallel Lennard-Jones particle update kernels over a
                double-buffered particle store, seeded from an FCC lattice

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

This package implements a compute-style molecular dynamics pipeline featuring:
- Face-centered-cubic lattice initial conditions
- Lennard-Jones force evaluation as workgroup-dispatched Numba kernels
- Ping-pong (double) or in-place (single) particle buffers
- A fixed three-kernel step schedule per frame

Modules:
    - layout: shared particle buffer layout descriptor
    - lattice: FCC initial-condition generator
    - physics: simulation parameters, Lennard-Jones law, energy diagnostics
    - kernels: velocity, position and force compute kernels
    - device: sequential dispatch substrate for the kernels
    - store: particle buffers and bind groups
    - scheduler: per-frame kernel dispatch order
    - simulation: host-side facade tying everything together
    - visualization: Matplotlib diagnostic plots
"""

from .layout import ParticleLayout, PACKED_LAYOUT, ALIGNED_LAYOUT
from .physics import SimulationParameters
from .device import ComputeDevice, DispatchError, DeviceLostError
from .store import ParticleStore, Buffering
from .scheduler import StepScheduler
from .simulation import MDSimulation, SimulationConfig, SimulationState

__version__ = "1.0.0"
__author__ = "Ryan Kamp"

__all__ = [
    "ParticleLayout",
    "PACKED_LAYOUT",
    "ALIGNED_LAYOUT",
    "SimulationParameters",
    "ComputeDevice",
    "DispatchError",
    "DeviceLostError",
    "ParticleStore",
    "Buffering",
    "StepScheduler",
    "MDSimulation",
    "SimulationConfig",
    "SimulationState",
]

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Molecular Dynamics Compute Pipeline - Command Line Interface
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Command line interface for running the particle pipeline headless.
"""

import argparse
import time
from typing import List, Optional

import matplotlib.pyplot as plt

from mdcompute.layout import PACKED_LAYOUT, ALIGNED_LAYOUT
from mdcompute.logging_config import setup_logging
from mdcompute.physics import SimulationParameters
from mdcompute.simulation import create_fcc_simulation, create_two_body_simulation
from mdcompute.store import Buffering
from mdcompute.visualization import (
    render_particle_buffer, render_energy_plot, render_separation_plot
)


def run_lattice_simulation(
    n_steps: int = 1000,
    system_length: float = 4.8,
    lattice_constant: float = 1.6,
    max_particles: int = 256,
    buffering: Buffering = Buffering.DOUBLE,
    aligned: bool = False,
    planar: bool = False,
    seed: Optional[int] = None,
    plot: Optional[str] = None
):
    """
    Seed a lattice and step it, reporting energies.

    Args:
        n_steps: Number of simulation steps
        system_length: Edge length of the lattice region
        lattice_constant: Unit cell edge length
        max_particles: Particle buffer capacity
        buffering: Ping-pong or in-place buffers
        aligned: Use the 16-byte aligned record layout
        planar: Use the planar lattice instead of FCC
        seed: Seed for initial velocities
        plot: Optional path to save a diagnostic figure
    """
    print("=" * 60)
    print("MD Compute Pipeline - Lattice Run")
    print("=" * 60)

    sim = create_fcc_simulation(
        system_length=system_length,
        lattice_constant=lattice_constant,
        max_num_particles=max_particles,
        buffering=buffering,
        layout=ALIGNED_LAYOUT if aligned else PACKED_LAYOUT,
        dimensions=2 if planar else 3,
        seed=seed,
    )
    print(f"\n{sim.num_particles} particles, {buffering.value} buffering, "
          f"{sim.scheduler.workgroup_count(sim.num_particles)} workgroups per kernel")

    times = []
    kinetic_energies = []
    potential_energies = []
    total_energies = []

    sample_every = max(1, n_steps // 50)
    t_start = time.time()

    for step in range(n_steps):
        sim.step()

        if step % sample_every == 0:
            state = sim.state
            times.append(state.time)
            kinetic_energies.append(state.kinetic_energy)
            potential_energies.append(state.potential_energy)
            total_energies.append(state.total_energy)

            if step % (sample_every * 10) == 0:
                print(f"  Step {step:5d}: T = {state.temperature:.4f}, E = {state.total_energy:.4f}")

    t_end = time.time()
    elapsed = max(t_end - t_start, 1e-9)

    state = sim.state
    print(f"\nSimulation completed in {elapsed:.2f} seconds")
    print(f"Steps per second: {n_steps / elapsed:.1f}")
    print(f"\nFinal State:")
    print(f"  Temperature:     {state.temperature:.4f}")
    print(f"  Kinetic Energy:  {state.kinetic_energy:.4f}")
    print(f"  Potential Energy:{state.potential_energy:.4f}")
    print(f"  Total Energy:    {state.total_energy:.4f}")

    if plot:
        fig, axes = plt.subplots(1, 2, figsize=(14, 6))
        render_particle_buffer(
            sim.render_buffer(), sim.num_particles, sim.store.layout, ax=axes[0]
        )
        axes[0].set_title(f'Step {sim.step_count}')
        render_energy_plot(times, kinetic_energies, potential_energies, total_energies, ax=axes[1])
        fig.tight_layout()
        fig.savefig(plot, dpi=150)
        plt.close(fig)
        print(f"\nPlot saved to {plot}")

    return sim


def run_two_body_demo(
    n_steps: int = 2000,
    separation: float = 1.5,
    buffering: Buffering = Buffering.DOUBLE,
    plot: Optional[str] = None
):
    """
    Release two particles at rest beyond the potential minimum.

    They attract, pass through r_min and are pushed apart again.

    Args:
        n_steps: Number of simulation steps
        separation: Initial distance (in sigma)
        buffering: Ping-pong or in-place buffers
        plot: Optional path to save the separation plot
    """
    print("=" * 60)
    print("MD Compute Pipeline - Two-Body Demo")
    print("=" * 60)

    params = SimulationParameters(delta_t=0.001)
    sim = create_two_body_simulation(separation, params=params, buffering=buffering)

    times = [0.0]
    separations = [sim.pair_separation()]

    for _ in range(n_steps):
        sim.step()
        times.append(sim.step_count * params.delta_t)
        separations.append(sim.pair_separation())

    closest = min(separations)
    print(f"\n  Initial separation: {separations[0]:.4f}")
    print(f"  Closest approach:   {closest:.4f}")
    print(f"  Potential minimum:  {params.r_min:.4f}")
    print(f"  Final separation:   {separations[-1]:.4f}")

    if plot:
        fig = render_separation_plot(times, separations, r_min=params.r_min)
        fig.tight_layout()
        fig.savefig(plot, dpi=150)
        plt.close(fig)
        print(f"\nPlot saved to {plot}")

    return separations


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Molecular Dynamics Compute Pipeline - Lennard-Jones lattice runs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --lattice --steps 500          Step an FCC lattice
  python main.py --lattice --single-buffer      Use the in-place buffer
  python main.py --two-body --plot pair.png     Two-particle demo
        """
    )

    parser.add_argument('--lattice', action='store_true',
                        help='Run a lattice simulation (default)')
    parser.add_argument('--two-body', action='store_true',
                        help='Run the two-particle demo')
    parser.add_argument('--steps', '-s', type=int, default=1000,
                        help='Number of simulation steps (default: 1000)')
    parser.add_argument('--system-length', type=float, default=4.8,
                        help='Lattice region edge length (default: 4.8)')
    parser.add_argument('--lattice-constant', type=float, default=1.6,
                        help='Unit cell edge length (default: 1.6)')
    parser.add_argument('--max-particles', type=int, default=256,
                        help='Particle buffer capacity (default: 256)')
    parser.add_argument('--single-buffer', action='store_true',
                        help='Update one buffer in place instead of ping-pong')
    parser.add_argument('--aligned', action='store_true',
                        help='Use the 16-byte aligned particle layout')
    parser.add_argument('--planar', action='store_true',
                        help='Use the planar lattice')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for initial velocities')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a diagnostic figure to this path')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose, log_file=args.log_file)
    buffering = Buffering.SINGLE if args.single_buffer else Buffering.DOUBLE

    if args.two_body:
        return run_two_body_demo(n_steps=args.steps, buffering=buffering, plot=args.plot)

    return run_lattice_simulation(
        n_steps=args.steps,
        system_length=args.system_length,
        lattice_constant=args.lattice_constant,
        max_particles=args.max_particles,
        buffering=buffering,
        aligned=args.aligned,
        planar=args.planar,
        seed=args.seed,
        plot=args.plot,
    )


if __name__ == "__main__":
    main()

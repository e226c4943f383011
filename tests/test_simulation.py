#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Simulation Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
License:        MIT License
================================================================================
"""

import logging

import numpy as np
import pytest
from mdcompute.device import DeviceLostError
from mdcompute.layout import PACKED_LAYOUT, ALIGNED_LAYOUT
from mdcompute.physics import SimulationParameters
from mdcompute.simulation import (
    MDSimulation, SimulationConfig, SimulationState,
    create_fcc_simulation, create_two_body_simulation
)
from mdcompute.store import Buffering


class TestSimulationConfig:
    """Tests for simulation configuration."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SimulationConfig()
        assert config.max_num_particles == 256
        assert config.workgroup_size == 64
        assert config.buffering is Buffering.DOUBLE
        assert config.layout is PACKED_LAYOUT
        assert config.system_length == 4.8
        assert config.lattice_constant == 1.6
        assert config.dimensions == 3
        assert config.seed is None

    def test_default_parameters_are_reduced_units(self):
        """Default force law: delta_t 0.005, epsilon 1, sigma 1, cutoff 2.5."""
        params = SimulationConfig().params
        assert isinstance(params, SimulationParameters)
        assert params.delta_t == 0.005
        assert params.epsilon == 1.0
        assert params.sigma == 1.0
        assert params.cutoff == 2.5
        assert params.dirty

    def test_custom_config(self):
        """Test custom configuration."""
        config = SimulationConfig(
            system_length=2.0,
            lattice_constant=1.0,
            buffering=Buffering.SINGLE,
            params=SimulationParameters(delta_t=0.001)
        )
        assert config.system_length == 2.0
        assert config.buffering is Buffering.SINGLE
        assert config.params.delta_t == 0.001

    def test_configs_do_not_share_parameters(self):
        assert SimulationConfig().params is not SimulationConfig().params


class TestMDSimulation:
    """Tests for the MD simulation host."""

    def test_initialization(self):
        """Nothing is loaded until the lattice is created."""
        sim = MDSimulation(SimulationConfig())
        assert not sim.initialized
        assert sim.num_particles == 0

    def test_step_before_initialization(self):
        sim = MDSimulation()
        with pytest.raises(RuntimeError):
            sim.step()

    def test_lattice_initialization(self):
        """Default lattice: 3 cells per side, 108 particles."""
        sim = MDSimulation()
        assert sim.initialize_lattice() == 108
        assert sim.positions().shape == (108, 3)
        assert sim.step_count == 0

    def test_two_cell_lattice(self):
        """System length 2, lattice constant 1 gives 32 particles."""
        sim = create_fcc_simulation(system_length=2.0, lattice_constant=1.0)
        assert sim.num_particles == 32

    def test_planar_initialization(self):
        sim = create_fcc_simulation(system_length=4.0, lattice_constant=1.0, dimensions=2)
        assert sim.num_particles == 64
        assert np.all(sim.positions()[:, 2] == 0.0)

    def test_seeded_velocities_repeat(self):
        a = create_fcc_simulation(seed=3)
        b = create_fcc_simulation(seed=3)
        assert np.array_equal(a.velocities(), b.velocities())

    def test_run_advances_steps(self):
        sim = create_fcc_simulation(seed=0)
        assert sim.run(5) == 5
        assert sim.state.step == 5
        assert sim.state.time == pytest.approx(5 * sim.params.delta_t)

    def test_step_updates_positions(self):
        sim = create_fcc_simulation(seed=0)
        initial = sim.positions().copy()
        sim.step()
        assert not np.allclose(sim.positions(), initial)

    def test_render_buffer_follows_steps(self):
        sim = create_fcc_simulation(seed=0)
        sim.step()
        first = sim.render_buffer()
        sim.step()
        assert sim.render_buffer() is not first
        sim.step()
        assert sim.render_buffer() is first


class TestParameters:
    """Tests for changing parameters between frames."""

    def test_set_parameters(self):
        sim = create_fcc_simulation(seed=0)
        sim.step()
        sim.set_parameters(epsilon=0.5, cutoff=3.0)
        assert sim.params.dirty
        sim.step()
        assert not sim.params.dirty
        assert sim.device.param_buffer[1] == pytest.approx(0.5)
        assert sim.device.param_buffer[3] == pytest.approx(3.0)

    def test_unknown_parameter(self):
        sim = create_fcc_simulation(seed=0)
        with pytest.raises(AttributeError):
            sim.set_parameters(temperature=1.0)
        with pytest.raises(AttributeError):
            sim.set_parameters(_dirty=False)


class TestState:
    """Tests for the state snapshot."""

    def test_snapshot_is_a_copy(self):
        sim = create_fcc_simulation(seed=0)
        state = sim.state
        assert isinstance(state, SimulationState)
        state.positions[:] = 0.0
        assert not np.all(sim.positions() == 0.0)

    def test_energies(self):
        """Crystal near r_min is bound; kinetic energy is positive."""
        sim = create_fcc_simulation(seed=0)
        state = sim.state
        assert state.n_particles == 108
        assert state.potential_energy < 0
        assert state.kinetic_energy > 0
        assert state.total_energy == pytest.approx(state.kinetic_energy + state.potential_energy)
        assert state.temperature > 0


class TestBufferingEquivalence:
    """Buffer schemes and layouts must not change the physics."""

    @pytest.mark.parametrize("buffering, layout", [
        (Buffering.SINGLE, PACKED_LAYOUT),
        (Buffering.DOUBLE, ALIGNED_LAYOUT),
        (Buffering.SINGLE, ALIGNED_LAYOUT),
    ])
    def test_same_trajectory(self, buffering, layout):
        reference = create_fcc_simulation(seed=5)
        other = create_fcc_simulation(seed=5, buffering=buffering, layout=layout)

        reference.run(20)
        other.run(20)

        assert np.allclose(reference.positions(), other.positions(), atol=1e-6)
        assert np.allclose(reference.velocities(), other.velocities(), atol=1e-6)


class TestEnergyConservation:
    """Tests for energy conservation (NVE ensemble)."""

    def test_energy_conservation_short(self):
        """Total energy drifts by less than 5% over a short run."""
        sim = create_fcc_simulation(seed=1)
        initial_energy = sim.state.total_energy

        sim.run(300)

        final_energy = sim.state.total_energy
        energy_drift = abs(final_energy - initial_energy) / abs(initial_energy)
        assert energy_drift < 0.05, f"Energy drift: {energy_drift*100:.2f}%"

    def test_momentum_conserved(self):
        """Pair forces cancel, so total momentum stays put."""
        sim = create_fcc_simulation(seed=2)
        initial = np.sum(sim.velocities().astype(np.float64), axis=0)
        sim.run(100)
        final = np.sum(sim.velocities().astype(np.float64), axis=0)
        assert np.allclose(initial, final, atol=1e-3)


class TestTwoBody:
    """Tests for the two-particle helper."""

    def test_starts_at_rest(self):
        sim = create_two_body_simulation(separation=1.5)
        assert sim.num_particles == 2
        assert sim.pair_separation() == pytest.approx(1.5)
        assert np.all(sim.velocities() == 0.0)

    def test_pair_closes_in(self):
        sim = create_two_body_simulation(1.5, params=SimulationParameters(delta_t=0.001))
        sim.run(200)
        assert sim.pair_separation() < 1.5

    def test_at_minimum_stays_put(self):
        """A pair at r_min is in equilibrium."""
        params = SimulationParameters(delta_t=0.001)
        sim = create_two_body_simulation(params.r_min, params=params)
        sim.run(100)
        assert sim.pair_separation() == pytest.approx(params.r_min, abs=1e-4)


class TestShutdown:
    """Tests for device teardown."""

    def test_step_after_shutdown(self, caplog):
        """Device loss is logged at ERROR, then re-raised."""
        sim = create_fcc_simulation(seed=0)
        sim.step()
        sim.shutdown()
        with caplog.at_level(logging.ERROR, logger="mdcompute"):
            with pytest.raises(DeviceLostError):
                sim.step()
        assert sim.step_count == 1

        records = [r for r in caplog.records if r.name == "mdcompute.simulation"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert "Step loop terminated at step 1" in records[0].getMessage()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

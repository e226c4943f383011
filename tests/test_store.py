#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Particle Store Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from mdcompute.device import ComputeDevice
from mdcompute.lattice import create_fcc
from mdcompute.layout import PACKED_LAYOUT, ALIGNED_LAYOUT
from mdcompute.physics import SimulationParameters
from mdcompute.scheduler import StepScheduler
from mdcompute.store import ParticleStore, Buffering


def filled_store(buffering=Buffering.DOUBLE, layout=PACKED_LAYOUT, capacity=64):
    device = ComputeDevice()
    store = ParticleStore(device, capacity, layout=layout, buffering=buffering)
    data = layout.allocate(capacity)
    n = create_fcc(3.2, 1.6, data, layout, np.random.default_rng(0))
    store.fill(data, n)
    return device, store


class TestAllocation:
    """Tests for buffer allocation."""

    def test_double_buffers(self):
        device, store = filled_store(Buffering.DOUBLE)
        assert len(store.buffers) == 2
        assert store.buffers[0] is not store.buffers[1]
        assert store.double_buffered

    def test_single_buffer(self):
        device, store = filled_store(Buffering.SINGLE)
        assert len(store.buffers) == 1
        assert not store.double_buffered

    def test_sized_to_capacity(self):
        """Buffers hold the full capacity; only num_particles are live."""
        device, store = filled_store(capacity=64, layout=ALIGNED_LAYOUT)
        for buffer in store.buffers:
            assert buffer.shape == (64 * 12,)
        assert store.num_particles == 32
        assert store.positions(0).shape == (32, 3)

    def test_buffering_from_string(self):
        store = ParticleStore(ComputeDevice(), 4, buffering="single")
        assert store.buffering is Buffering.SINGLE

    def test_fill_writes_every_buffer(self):
        device, store = filled_store(Buffering.DOUBLE)
        assert np.array_equal(store.buffers[0], store.buffers[1])

    def test_bind_groups_share_parameter_buffer(self):
        device, store = filled_store()
        for bind_group in store.bind_groups:
            assert bind_group.params is device.param_buffer


class TestDoubleBufferParity:
    """Tests for ping-pong buffer selection."""

    def test_next_becomes_current(self):
        """The buffer written at step t is read at step t + 1."""
        device, store = filled_store(Buffering.DOUBLE)
        for t in range(6):
            assert store.next(t) is store.current(t + 1)
            assert store.current(t) is not store.next(t)

    def test_bind_group_pairs(self):
        """Bind group t % 2 reads buffer t % 2 and writes the other."""
        device, store = filled_store(Buffering.DOUBLE)
        for t in range(4):
            bind_group = store.bind_group(t)
            assert bind_group.src is store.current(t)
            assert bind_group.dst is store.next(t)

    def test_render_buffer_is_last_written(self):
        """After a step the consumer reads what that step wrote."""
        device, store = filled_store(Buffering.DOUBLE)
        scheduler = StepScheduler(device, store, SimulationParameters())

        for _ in range(5):
            written = store.next(scheduler.t)
            scheduler.step()
            assert store.render_buffer(scheduler.t) is written

    def test_render_buffer_not_written_by_next_step(self):
        """The next step only reads the buffer being displayed."""
        device, store = filled_store(Buffering.DOUBLE)
        scheduler = StepScheduler(device, store, SimulationParameters())
        scheduler.step()

        shown = store.render_buffer(scheduler.t)
        snapshot = shown.copy()
        scheduler.step()

        assert np.array_equal(shown, snapshot)
        assert store.render_buffer(scheduler.t) is not shown

    def test_step_reads_previous_results(self):
        """Each step continues from the previous step's output."""
        device, store = filled_store(Buffering.DOUBLE)
        params = SimulationParameters(delta_t=0.01)
        scheduler = StepScheduler(device, store, params)

        scheduler.step()
        after_one = store.positions(scheduler.t).copy()
        velocities = store.velocities(scheduler.t).astype(np.float64)
        scheduler.step()

        expected = after_one + velocities * 0.01
        assert np.allclose(store.positions(scheduler.t), expected, atol=1e-6)


class TestSingleBuffer:
    """Tests for the in-place buffer."""

    def test_same_buffer_every_step(self):
        device, store = filled_store(Buffering.SINGLE)
        for t in range(3):
            assert store.current(t) is store.next(t)
            assert store.render_buffer(t) is store.buffers[0]

    def test_matches_double_buffering(self):
        """In-place and ping-pong produce the same trajectory."""
        results = []
        for buffering in (Buffering.DOUBLE, Buffering.SINGLE):
            device, store = filled_store(buffering)
            scheduler = StepScheduler(device, store, SimulationParameters(delta_t=0.01))
            scheduler.run(7)
            results.append(store.positions(scheduler.t).copy())

        assert np.allclose(results[0], results[1], atol=1e-6)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

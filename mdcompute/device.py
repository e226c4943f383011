#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Compute Device
================================================================================

Project:        Molecular Dynamics Compute Pipeline
Module:         device.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

A single-queue dispatch substrate for the particle kernels.

Dispatches run one at a time in submission order. A dispatch returns only
after every workgroup has finished, so its writes are visible to the next
one; this is the barrier the step schedule relies on.

A device that has been destroyed or whose kernel failed is lost. Every
later dispatch or buffer write raises DeviceLostError and the host is
expected to stop the step loop. Nothing is retried.
"""

import logging
import numpy as np
from collections import deque
from typing import Dict, Callable, Deque, Optional
from dataclasses import dataclass

from .kernels import PIPELINES
from .layout import ParticleLayout

logger = logging.getLogger(__name__)

DEFAULT_WORKGROUP_SIZE = 64


class DispatchError(RuntimeError):
    """The device rejected or failed a dispatch."""


class DeviceLostError(DispatchError):
    """The device is no longer usable."""


@dataclass(frozen=True)
class BindGroup:
    """
    Resources bound to one dispatch.

    ``src`` is read, ``dst`` is written. They are the same array when the
    store runs in single-buffer mode.
    """
    params: np.ndarray
    src: np.ndarray
    dst: np.ndarray
    layout: ParticleLayout
    label: str = ""


@dataclass(frozen=True)
class DispatchRecord:
    """One completed dispatch, kept for inspection."""
    pipeline: str
    workgroups: int
    bind_group: str


class ComputeDevice:
    """
    Sequential executor for workgroup-dispatched kernels.

    Holds the uniform parameter buffer shared by all kernels and a bounded
    history of completed dispatches.
    """

    def __init__(
        self,
        workgroup_size: int = DEFAULT_WORKGROUP_SIZE,
        history_size: int = 64,
        pipelines: Optional[Dict[str, Callable]] = None,
        label: str = "cpu"
    ):
        self.workgroup_size = workgroup_size
        self.label = label
        self.pipelines = dict(PIPELINES if pipelines is None else pipelines)
        self.history: Deque[DispatchRecord] = deque(maxlen=history_size)
        self.dispatch_count = 0
        self.param_buffer = np.zeros(4, dtype=np.float32)
        self._lost_reason: Optional[str] = None

    @property
    def lost(self) -> bool:
        return self._lost_reason is not None

    def _check_alive(self) -> None:
        if self._lost_reason is not None:
            raise DeviceLostError(f"Device '{self.label}' lost: {self._lost_reason}")

    def lose(self, reason: str = "device lost") -> None:
        """Mark the device unusable."""
        if self._lost_reason is None:
            self._lost_reason = reason
            logger.error(f"Device '{self.label}' lost: {reason}")

    def destroy(self) -> None:
        self.lose("destroyed")

    def write_buffer(self, buffer: np.ndarray, data: np.ndarray, offset: int = 0) -> None:
        """
        Copy ``data`` into ``buffer`` starting at element ``offset``.

        Raises:
            DeviceLostError: If the device is lost
        """
        self._check_alive()
        data = np.asarray(data, dtype=buffer.dtype).ravel()
        buffer[offset:offset + data.shape[0]] = data

    def upload_parameters(self, block: np.ndarray) -> None:
        """Replace the whole parameter block."""
        self.write_buffer(self.param_buffer, block)
        logger.debug(f"Uploaded parameter block {self.param_buffer.tolist()}")

    def workgroup_count(self, num_particles: int) -> int:
        """Workgroups needed to cover ``num_particles``: ceil(n / size)."""
        return -(-num_particles // self.workgroup_size)

    def dispatch(self, pipeline: str, bind_group: BindGroup, workgroups: int, num_particles: int) -> None:
        """
        Run one kernel to completion.

        Args:
            pipeline: Kernel name, one of ``self.pipelines``
            bind_group: Buffers for this dispatch
            workgroups: Number of workgroups
            num_particles: Invocations past this index do nothing

        Raises:
            DeviceLostError: If the device is lost, or the kernel fails
            DispatchError: If the dispatch is malformed
        """
        self._check_alive()

        kernel = self.pipelines.get(pipeline)
        if kernel is None:
            raise DispatchError(f"Unknown pipeline: {pipeline}")
        if workgroups <= 0:
            raise DispatchError(f"Invalid workgroup count {workgroups} for {pipeline}")

        layout = bind_group.layout
        try:
            kernel(
                bind_group.params,
                layout.rows(bind_group.src),
                layout.rows(bind_group.dst),
                num_particles,
                layout.position_offset,
                layout.velocity_offset,
                self.workgroup_size,
                workgroups,
            )
        except Exception as exc:
            self.lose(f"{pipeline} failed: {exc}")
            raise DeviceLostError(f"Dispatch of {pipeline} failed") from exc

        self.dispatch_count += 1
        self.history.append(DispatchRecord(pipeline, workgroups, bind_group.label))
        logger.debug(f"Dispatched {pipeline} x{workgroups} on {bind_group.label}")

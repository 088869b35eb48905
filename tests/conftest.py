"""Pytest configuration for shape3d tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. The batch kernels
    work in double precision, so the CPU backend is used.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def reset_intersector_config():
    """Restore the default intersector configuration around each test.

    This ensures tests that enable strict dispatch stay isolated.
    """
    from src.shape3d.core.config import IntersectorConfig, set_intersector_config

    set_intersector_config(IntersectorConfig())
    yield
    set_intersector_config(IntersectorConfig())

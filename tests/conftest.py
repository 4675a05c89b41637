"""
Pytest configuration and shared fixtures for the domain_clip test suite.
"""

import pytest

import numpy as np
import pyvista as pv

from domain_clip import PartitionedDataSet

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (run real pyvista clipping)")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Mesh Fixtures
# =============================================================================


def make_cube(origin=(0.0, 0.0, 0.0), size=1.0, divisions=4) -> pv.UnstructuredGrid:
    """Hexahedral cube with ``divisions`` cells per edge and two sample fields."""
    spacing = size / divisions
    grid = pv.ImageData(
        dimensions=(divisions + 1,) * 3,
        spacing=(spacing,) * 3,
        origin=origin,
    )
    mesh = grid.cast_to_unstructured_grid()
    mesh.point_data["temperature"] = np.asarray(mesh.points)[:, 0].copy()
    mesh.cell_data["material"] = np.arange(mesh.n_cells, dtype=np.int64)
    return mesh


@pytest.fixture
def unit_cube():
    """Unit cube [0,1]³ split into 4×4×4 hexahedra (grid lines through 0.5)."""
    return make_cube()


@pytest.fixture
def cube_factory():
    """Factory for cubes at arbitrary positions."""
    return make_cube


@pytest.fixture
def single_domain(unit_cube):
    """Dataset holding the unit cube as domain 0."""
    return PartitionedDataSet([(unit_cube, 0)])


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)

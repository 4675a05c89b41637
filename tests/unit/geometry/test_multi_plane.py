"""
Tests for the multi-plane (half-space intersection) clip surface.

Run with: python -m pytest tests/unit/geometry/test_multi_plane.py -v
"""

import pytest

import numpy as np

from domain_clip.filters import Clip
from domain_clip.geometry.implicit import ImplicitFunctionType, MultiPlane
from domain_clip.utils.exceptions import DimensionMismatchError, GeometryContractError

AXES = np.eye(3)


@pytest.fixture
def corner3():
    """Corner at (0.5, 0.5, 0.5) bounded by the +x, +y and +z planes."""
    return MultiPlane(points=[[0.5, 0.5, 0.5]] * 3, normals=AXES, num_planes=3)


@pytest.fixture
def tilted_corner():
    """Two non-orthogonal planes through different points."""
    n1 = np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0)
    n2 = np.array([0.0, -1.0, 2.0]) / np.sqrt(5.0)
    return MultiPlane(points=[[0.1, -0.3, 0.2], [0.4, 0.0, -0.5]], normals=[n1, n2], num_planes=2)


class TestValue:
    """Test the max-combination value."""

    def test_inside_all_half_spaces_is_negative(self, corner3, rng):
        """Points strictly inside every half-space have a negative value."""
        points = rng.uniform(-2.0, 0.49, size=(500, 3))
        assert np.all(corner3.plane_distances(points) < 0)
        assert np.all(corner3.value(points) < 0)

    def test_outside_one_half_space_is_positive(self, corner3, rng):
        """Violating any single half-space makes the value positive."""
        points = rng.uniform(-2.0, 0.4, size=(300, 3))
        points[:, 1] = rng.uniform(0.6, 2.0, size=300)  # outside the y plane only
        assert np.all(corner3.value(points) > 0)

    def test_value_is_max_of_plane_distances(self, tilted_corner, rng):
        """Value equals the largest signed plane distance."""
        points = rng.normal(size=(200, 3))
        distances = tilted_corner.plane_distances(points)
        np.testing.assert_allclose(tilted_corner.value(points), distances.max(axis=1))

    def test_single_point_returns_float(self, corner3):
        """A (3,) input returns a Python float."""
        value = corner3.value([0.0, 0.0, 0.0])
        assert isinstance(value, float)
        assert value == pytest.approx(-0.5)

    def test_boundary_is_zero(self, corner3):
        """The corner point itself lies on the surface."""
        assert corner3.is_on_boundary(np.array([0.5, 0.5, 0.5]))
        assert corner3.contains(np.array([0.5, 0.5, 0.5]))

    def test_inactive_slot_is_ignored(self):
        """The third slot does not contribute when num_planes is 2."""
        surface = MultiPlane(
            points=[[0, 0, 0], [0, 0, 0], [100, 100, 100]],
            normals=[[1, 0, 0], [0, 1, 0], [0, 0, -1]],
            num_planes=2,
        )
        # With the third plane active this point would be far outside
        assert surface.value([-1.0, -1.0, -50.0]) == pytest.approx(-1.0)


class TestGradient:
    """Test the subgradient selection."""

    def test_gradient_is_normal_of_max_plane(self, tilted_corner, rng):
        """Gradient is the normal of the plane with the largest distance."""
        points = rng.normal(size=(200, 3))
        winner = np.argmax(tilted_corner.plane_distances(points), axis=1)
        expected = tilted_corner.normals[winner]
        np.testing.assert_allclose(tilted_corner.gradient(points), expected)

    def test_gradient_is_unit_length(self, tilted_corner, rng):
        """Gradients are always one of the configured unit normals."""
        grads = tilted_corner.gradient(rng.normal(size=(100, 3)))
        np.testing.assert_allclose(np.linalg.norm(grads, axis=1), 1.0)

    def test_tie_goes_to_lowest_index(self):
        """On an exact tie the earlier plane's normal is returned."""
        xy = MultiPlane(points=[[0, 0, 0], [0, 0, 0]], normals=[[1, 0, 0], [0, 1, 0]], num_planes=2)
        yx = MultiPlane(points=[[0, 0, 0], [0, 0, 0]], normals=[[0, 1, 0], [1, 0, 0]], num_planes=2)

        crease_point = np.array([1.0, 1.0, 0.0])
        np.testing.assert_array_equal(xy.gradient(crease_point), [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(yx.gradient(crease_point), [0.0, 1.0, 0.0])

    def test_identical_planes_tie(self):
        """Identical planes at different slots give identical distances."""
        surface = MultiPlane(points=[[1, 2, 3]] * 3, normals=[[0, 0, 1]] * 3, num_planes=3)
        distances = surface.plane_distances([4.0, 5.0, 7.0])
        assert np.all(distances == distances[0])
        np.testing.assert_array_equal(surface.gradient([4.0, 5.0, 7.0]), [0.0, 0.0, 1.0])

    def test_gradient_batch_shape(self, corner3):
        """(N, 3) input gives (N, 3) gradients."""
        assert corner3.gradient(np.zeros((7, 3))).shape == (7, 3)


class TestConstruction:
    """Test plane-count contract and storage."""

    @pytest.mark.parametrize("num_planes", [0, 1, 4, 2.5])
    def test_invalid_plane_count(self, num_planes):
        """Only 2 or 3 active planes are allowed."""
        with pytest.raises(GeometryContractError):
            MultiPlane(points=np.zeros((3, 3)), normals=AXES, num_planes=num_planes)

    def test_too_few_planes_supplied(self):
        """num_planes cannot exceed the number of supplied planes."""
        with pytest.raises(GeometryContractError):
            MultiPlane(points=[[0, 0, 0], [0, 0, 0]], normals=[[1, 0, 0], [0, 1, 0]], num_planes=3)

    def test_bad_shape(self):
        """Points must be (k, 3)."""
        with pytest.raises(DimensionMismatchError):
            MultiPlane(points=np.zeros((2, 2)), normals=np.zeros((2, 2)), num_planes=2)

    def test_missing_slots_are_zero(self):
        """Slots beyond the supplied planes are zero."""
        surface = MultiPlane(points=[[1, 1, 1], [2, 2, 2]], normals=[[1, 0, 0], [0, 1, 0]], num_planes=2)
        points, normals = surface.get_planes()
        assert points.shape == (3, 3) and normals.shape == (3, 3)
        np.testing.assert_array_equal(points[2], 0.0)
        np.testing.assert_array_equal(normals[2], 0.0)

    def test_normals_not_renormalized(self):
        """Stored normals are used exactly as given."""
        surface = MultiPlane(points=np.zeros((2, 3)), normals=[[2, 0, 0], [0, 3, 0]], num_planes=2)
        np.testing.assert_array_equal(surface.normals[0], [2.0, 0.0, 0.0])
        assert surface.value([1.0, 0.0, 0.0]) == pytest.approx(2.0)

    def test_getters_return_copies(self, corner3):
        """Mutating a returned array does not change the surface."""
        points = corner3.points
        points[:] = 99.0
        np.testing.assert_array_equal(corner3.points[0], [0.5, 0.5, 0.5])

    def test_function_type(self, corner3):
        assert corner3.function_type is ImplicitFunctionType.MULTI_PLANE


class TestVersioning:
    """Test modification tracking."""

    def test_every_setter_bumps_version(self, corner3):
        """set_planes, set_plane and set_num_planes all mark the surface modified."""
        versions = [corner3.version]

        corner3.set_planes(np.zeros((3, 3)), AXES)
        versions.append(corner3.version)
        corner3.set_plane(1, [1, 1, 1], [0, 0, 1])
        versions.append(corner3.version)
        corner3.set_num_planes(2)
        versions.append(corner3.version)

        assert versions == sorted(set(versions))
        assert corner3.num_planes == 2
        np.testing.assert_array_equal(corner3.points[1], [1.0, 1.0, 1.0])

    def test_evaluation_does_not_bump_version(self, corner3):
        before = corner3.version
        corner3.value(np.zeros((10, 3)))
        corner3.gradient(np.zeros((10, 3)))
        assert corner3.version == before

    def test_invalid_setter_leaves_state(self, corner3):
        """A rejected update neither changes the planes nor the version."""
        before = corner3.version
        with pytest.raises(GeometryContractError):
            corner3.set_plane(3, [0, 0, 0], [1, 0, 0])
        with pytest.raises(GeometryContractError):
            corner3.set_num_planes(1)
        assert corner3.version == before
        assert corner3.num_planes == 3


class TestPlaneBuilders:
    """Test the Clip filter's two- and three-plane builders."""

    def test_two_plane_round_trip(self):
        """Slots 0 and 1 hold the inputs, slot 2 the zero placeholder."""
        clip = Clip()
        clip.set_2plane_clip([0.1, 0.2, 0.3], [1, 0, 0], [-1.0, 4.0, 2.5], [0, 0, 1])
        surface = clip.implicit_function

        assert isinstance(surface, MultiPlane)
        assert surface.num_planes == 2
        points, normals = surface.get_planes()
        np.testing.assert_allclose(points, [[0.1, 0.2, 0.3], [-1.0, 4.0, 2.5], [0, 0, 0]])
        np.testing.assert_allclose(normals, [[1, 0, 0], [0, 0, 1], [0, 0, 0]])

    def test_two_plane_normalizes_normals(self):
        """Normals are normalized; origins are left as-is."""
        clip = Clip()
        clip.set_2plane_clip([3, 4, 5], [0, 0, 5], [6, 7, 8], [3, 4, 0])
        points, normals = clip.implicit_function.get_planes()
        np.testing.assert_allclose(points[:2], [[3, 4, 5], [6, 7, 8]])
        np.testing.assert_allclose(normals[:2], [[0, 0, 1], [0.6, 0.8, 0]])

    def test_three_plane_normalizes_all(self):
        clip = Clip()
        clip.set_3plane_clip([0, 0, 0], [2, 0, 0], [0, 0, 0], [0, 3, 0], [1, 1, 1], [0, 0, -4])
        surface = clip.implicit_function
        assert surface.num_planes == 3
        np.testing.assert_allclose(np.linalg.norm(surface.normals, axis=1), 1.0)
        np.testing.assert_allclose(surface.normals[2], [0, 0, -1])

    def test_duplicate_planes_reduce_to_plane_distance(self, rng):
        """Two copies of one plane evaluate to dot(p - origin, normal)."""
        origin = np.array([0.3, -0.2, 1.0])
        normal = np.array([1.0, 2.0, 2.0]) / 3.0

        clip = Clip()
        clip.set_2plane_clip(origin, normal, origin, normal)

        points = rng.normal(size=(100, 3))
        expected = (points - origin) @ normal
        np.testing.assert_allclose(clip.implicit_function.value(points), expected)

    @pytest.mark.parametrize("bad_index", [0, 1])
    def test_zero_normal_rejected(self, bad_index):
        """A zero normal is a caller error."""
        normals = [[1, 0, 0], [0, 1, 0]]
        normals[bad_index] = [0, 0, 0]
        clip = Clip()
        with pytest.raises(GeometryContractError, match="non-zero"):
            clip.set_2plane_clip([0, 0, 0], normals[0], [0, 0, 0], normals[1])
        assert clip.implicit_function is None

    def test_reconfiguration_replaces_surface(self):
        """Each builder call installs a new surface instance."""
        clip = Clip()
        clip.set_2plane_clip([0, 0, 0], [1, 0, 0], [0, 0, 0], [0, 1, 0])
        first = clip.implicit_function
        clip.set_3plane_clip([0, 0, 0], [1, 0, 0], [0, 0, 0], [0, 1, 0], [0, 0, 0], [0, 0, 1])
        assert clip.implicit_function is not first
        assert first.num_planes == 2

"""
Exception classes for domain_clip with structured, actionable error messages.

Construction-time contract violations (bad plane counts, zero normals,
malformed vectors) surface as ``GeometryContractError`` or
``DimensionMismatchError`` and are never caught inside the package.
Execution-time failures of the clip primitive surface as
``ClipExecutionError`` and abort the whole multi-domain run.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


class ClipFilterError(Exception):
    """
    Base exception for clip filter errors with context and suggestions.

    Carries:
    - Clear error description
    - Filter context information
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        filter_name: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.filter_name = filter_name or "domain_clip"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.filter_name}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class GeometryContractError(ClipFilterError, ValueError):
    """Raised when geometric parameters violate a construction-time contract."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        reason: str,
        filter_name: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": _short_repr(provided_value),
        }

        super().__init__(
            message=f"Invalid geometry for '{parameter_name}': {reason}",
            filter_name=filter_name,
            suggested_action=_generate_geometry_suggestions(parameter_name, reason),
            error_code="GEOMETRY_CONTRACT_VIOLATION",
            diagnostic_data=diagnostic_data,
        )
        self.parameter_name = parameter_name
        self.reason = reason


class DimensionMismatchError(ClipFilterError, ValueError):
    """Raised when an array does not have the expected shape."""

    def __init__(
        self,
        array_name: str,
        provided_shape: tuple,
        expected_shape: tuple | str,
        filter_name: str | None = None,
    ):
        diagnostic_data = {
            "array_name": array_name,
            "provided_shape": str(provided_shape),
            "expected_shape": str(expected_shape),
        }

        super().__init__(
            message=f"Dimension mismatch for {array_name}",
            filter_name=filter_name,
            suggested_action=f"Pass {array_name} as a 3-vector or an (N, 3) array of points",
            error_code="DIMENSION_MISMATCH",
            diagnostic_data=diagnostic_data,
        )
        self.array_name = array_name
        self.provided_shape = provided_shape


class FilterStateError(ClipFilterError):
    """Raised when a filter is run or read before it is ready."""

    def __init__(
        self,
        operation_attempted: str,
        filter_name: str | None = None,
        filter_state: str | None = None,
        suggested_action: str | None = None,
    ):
        diagnostic_data = {
            "attempted_operation": operation_attempted,
            "filter_state": filter_state or "not_executed",
        }

        super().__init__(
            message=f"Cannot perform '{operation_attempted}' in the current filter state",
            filter_name=filter_name,
            suggested_action=suggested_action or "Call set_input() and update() before reading the output",
            error_code="FILTER_NOT_READY",
            diagnostic_data=diagnostic_data,
        )
        self.operation_attempted = operation_attempted


class ClipExecutionError(ClipFilterError):
    """Raised when the clip primitive fails on one domain of a multi-domain run."""

    def __init__(
        self,
        domain_id: int,
        domain_index: int,
        cause: BaseException,
        filter_name: str | None = None,
    ):
        diagnostic_data = {
            "domain_id": domain_id,
            "domain_index": domain_index,
            "cause": f"{type(cause).__name__}: {cause}",
        }

        super().__init__(
            message=f"Clipping failed on domain {domain_id}; no output was produced",
            filter_name=filter_name,
            suggested_action="Check that the domain mesh is a valid pyvista dataset with 3D points",
            error_code="DOMAIN_CLIP_FAILURE",
            diagnostic_data=diagnostic_data,
        )
        self.domain_id = domain_id
        self.domain_index = domain_index
        self.cause = cause


def validate_vector3(value: Any, name: str, filter_name: str | None = None) -> NDArray[np.float64]:
    """
    Convert ``value`` to a finite float64 3-vector.

    Raises:
        DimensionMismatchError: If ``value`` does not have shape (3,)
        GeometryContractError: If any component is NaN or infinite
    """
    vec = np.asarray(value, dtype=np.float64)
    if vec.shape != (3,):
        raise DimensionMismatchError(name, vec.shape, (3,), filter_name=filter_name)
    if not np.all(np.isfinite(vec)):
        raise GeometryContractError(name, value, "components must be finite", filter_name=filter_name)
    return vec


def _short_repr(value: Any, limit: int = 80) -> str:
    text = repr(value.tolist()) if isinstance(value, np.ndarray) else repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _generate_geometry_suggestions(parameter_name: str, reason: str) -> str:
    """Generate specific suggestions for geometry contract violations."""
    name = parameter_name.lower()

    if "normal" in name:
        return "Provide a non-zero normal vector; it is normalized for you"
    if "num_planes" in name or "plane count" in reason:
        return "Use set_2plane_clip() or set_3plane_clip(); only 2 or 3 planes are supported"
    if "radius" in name:
        return "Use a strictly positive radius"
    if "bounds" in name:
        return "Pass bounds as (xmin, xmax, ymin, ymax, zmin, zmax) with min <= max on every axis"
    return "Check the geometric parameters passed to the clip setter"

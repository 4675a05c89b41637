"""
Mesh clip primitive.

``clip_mesh`` cuts one pyvista mesh along the zero level set of an implicit
function: the function is sampled at every mesh point, then
``DataSet.clip_scalar`` interpolates the cut inside each crossing cell.
"""

from __future__ import annotations

import numpy as np
import pyvista as pv

from domain_clip.geometry.implicit import ImplicitFunction

from .field_selection import FieldAssociation, FieldSelection

IMPLICIT_VALUE_ARRAY = "__clip_implicit_value"


def apply_field_selection(mesh: pv.DataSet, selection: FieldSelection) -> None:
    """Remove, in place, every point/cell array the selection rejects."""
    for name in list(mesh.point_data.keys()):
        if not selection.is_field_selected(name, FieldAssociation.POINTS):
            mesh.point_data.remove(name)
    for name in list(mesh.cell_data.keys()):
        if not selection.is_field_selected(name, FieldAssociation.CELLS):
            mesh.cell_data.remove(name)


def clip_mesh(
    mesh: pv.DataSet,
    function: ImplicitFunction,
    invert: bool = False,
    field_selection: FieldSelection | None = None,
) -> pv.DataSet:
    """
    Clip a mesh with an implicit function.

    Args:
        mesh: Input mesh (left unmodified)
        function: Clip surface
        invert: False keeps the region where the function is <= 0,
            True keeps the region where it is >= 0
        field_selection: Arrays to carry to the output (default: all)

    Returns:
        Clipped mesh; an empty ``UnstructuredGrid`` if nothing is kept
    """
    if mesh.n_points == 0:
        return pv.UnstructuredGrid()

    work = mesh.copy(deep=False)
    if field_selection is not None:
        apply_field_selection(work, field_selection)

    work.point_data[IMPLICIT_VALUE_ARRAY] = function.value(np.asarray(work.points))

    # pyvista keeps scalars below ``value`` when its own ``invert`` is True
    clipped = work.clip_scalar(scalars=IMPLICIT_VALUE_ARRAY, invert=not invert, value=0.0)

    if IMPLICIT_VALUE_ARRAY in clipped.point_data:
        clipped.point_data.remove(IMPLICIT_VALUE_ARRAY)
    return clipped

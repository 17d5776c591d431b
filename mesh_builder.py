# mesh_builder.py

import numpy as np
import trimesh
from typing import List, Tuple, Optional, Set

import constants as const

# Import from other project modules
from grid_core import Grid
from geometry import extract_wall_bases_2d, entry_exit_openings

# Imports needed for base generation
import trimesh.creation
import trimesh.util


def _is_mesh_degenerate(vertices: np.ndarray) -> bool:
    """Checks whether all vertices of a prism collapse onto (almost) one point."""
    if len(vertices) < 3:
        return True
    spread = vertices - vertices[0]
    max_dist_sq = np.max(np.einsum("ij,ij->i", spread, spread))
    return max_dist_sq < const.MESH_VERTEX_DISTANCE_TOLERANCE_SQ


def _create_extruded_prism_simple(
    base_verts_2d: Tuple[Tuple[float, float], ...],
    height: float,
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Extrudes a counter-clockwise quad straight up along Z."""
    if len(base_verts_2d) != 4:
        return None  # Expect quads
    base_verts = np.array([[x, y, 0.0] for x, y in base_verts_2d])
    top_verts = base_verts + np.array([0.0, 0.0, height])
    verts = np.vstack((base_verts, top_verts))  # 0-3 base, 4-7 top
    faces = np.array(
        [
            [0, 1, 5],
            [0, 5, 4],
            [1, 2, 6],
            [1, 6, 5],
            [2, 3, 7],
            [2, 7, 6],
            [3, 0, 4],
            [3, 4, 7],  # Sides
            [4, 5, 6],
            [4, 6, 7],  # Top cap
            [3, 2, 1],
            [3, 1, 0],  # Bottom cap (reversed)
        ],
        dtype=np.int32,
    )
    return verts, faces


def _to_model_quad(
    base_verts_2d: Tuple[Tuple[float, float], ...]
) -> Tuple[Tuple[float, float], ...]:
    """
    Canvas y grows downward; the model's y grows upward. Mirroring y flips
    the winding, so the vertex order is reversed to keep quads counter-clockwise.
    """
    return tuple((x, -y) for x, y in reversed(base_verts_2d))


def create_2d_maze_mesh(
    grid: Grid,
    wall_thickness: float = const.MAZE_2D_WALL_THICKNESS,
    wall_height: float = const.MAZE_2D_WALL_HEIGHT,
    base_height: float = const.MAZE_2D_BASE_HEIGHT,
    cell_size: float = const.CELL_SIZE,
    openings: Optional[Set[Tuple[str, str]]] = None,
) -> Optional[trimesh.Trimesh]:
    """
    Builds a printable mesh of the maze: every standing wall extruded to
    ``wall_height`` on top of a rectangular base slab whose top sits at z=0.
    Returns None if no wall could be built.
    """
    print(
        f"--- Building 2D Maze Mesh: Wall T/H={wall_thickness:.2f}/{wall_height:.2f}, "
        f"Base H={base_height:.2f} ---"
    )
    wall_bases = extract_wall_bases_2d(grid, wall_thickness, cell_size, openings=openings)
    if not wall_bases:
        print("ERROR: No wall bases found. Cannot build maze mesh.")
        return None

    # --- Generate Wall Meshes from Bases ---
    all_wall_meshes: List[trimesh.Trimesh] = []
    skip_count = 0
    for base_verts_2d in wall_bases:
        extrusion_result = _create_extruded_prism_simple(
            _to_model_quad(base_verts_2d), wall_height
        )
        if extrusion_result is None:
            skip_count += 1
            continue
        verts, faces = extrusion_result
        if _is_mesh_degenerate(verts):
            skip_count += 1
            continue
        all_wall_meshes.append(trimesh.Trimesh(vertices=verts, faces=faces, process=False))

    print(f"  Wall Mesh Summary: Gen={len(all_wall_meshes)}, Skip={skip_count}")
    if not all_wall_meshes:
        print("ERROR: No valid wall meshes generated.")
        return None

    combined_walls_mesh = trimesh.util.concatenate(all_wall_meshes)

    # --- Base Slab ---
    if base_height <= const.GEOMETRY_TOLERANCE:
        print("  Skipping base slab creation.")
        return combined_walls_mesh

    width = grid.cols * cell_size + wall_thickness
    depth = grid.rows * cell_size + wall_thickness
    print(f"  Creating base slab {width:.2f} x {depth:.2f} x {base_height:.2f}...")
    base_mesh = trimesh.creation.box(extents=[width, depth, base_height])
    # Center under the maze footprint with its top face at z=0
    base_mesh.apply_translation(
        [grid.cols * cell_size / 2.0, -grid.rows * cell_size / 2.0, -base_height / 2.0]
    )

    final_mesh = trimesh.util.concatenate([combined_walls_mesh, base_mesh])
    print(f"  Combined Walls & Base: {len(final_mesh.vertices)}V, {len(final_mesh.faces)}F")
    return final_mesh


def create_2d_maze_stl(
    grid: Grid,
    output_filename: str,
    wall_thickness: float = const.MAZE_2D_WALL_THICKNESS,
    wall_height: float = const.MAZE_2D_WALL_HEIGHT,
    base_height: float = const.MAZE_2D_BASE_HEIGHT,
    cell_size: float = const.CELL_SIZE,
    open_entry_exit: bool = True,
) -> Optional[trimesh.Trimesh]:
    """
    Creates an STL file for the maze walls with a solid base. With
    ``open_entry_exit`` the outer walls next to the start and end cells are
    left out so the maze can be entered from outside.
    """
    print(f"\n--- Generating 2D Maze STL: {output_filename} ---")
    openings = entry_exit_openings(grid) if open_entry_exit else None
    try:
        final_mesh = create_2d_maze_mesh(
            grid,
            wall_thickness=wall_thickness,
            wall_height=wall_height,
            base_height=base_height,
            cell_size=cell_size,
            openings=openings,
        )
    except Exception as e:
        print(f"ERROR building 2D maze mesh: {e}")
        return None

    if not (final_mesh and len(final_mesh.faces) > 0):
        print("ERROR: Final 2D mesh is invalid or empty. Cannot export.")
        return None
    print(f"  Exporting final 2D maze to {output_filename}...")
    try:
        final_mesh.export(output_filename)
        print("  Export complete.")
    except Exception as e:
        print(f"ERROR during final 2D mesh export: {e}")
        return None
    return final_mesh

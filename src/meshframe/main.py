"""
Command-Line Entry Point
=======================
Loads a model, prints its render buffer summary and optionally saves or
displays it.

Usage:
    $ python -m meshframe assets/cube.obj --projection planar --line-length 0.1 --show
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from meshframe.config import DEFAULT_LINE_MAGNITUDE, LoadOptions
from meshframe.controller.loader import load_with_options
from meshframe.logging_config import setup_logging
from meshframe.model.types import FileFormat, UVProjection

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meshframe",
        description="Derive normals, tangents and bitangents for a polygonal model.",
    )
    parser.add_argument("model", help="Path to the model file.")
    parser.add_argument("--format", dest="file_format", default=FileFormat.OBJ.value,
                        help="Format tag of the model file (default: obj).")
    parser.add_argument("--projection", choices=[p.value for p in UVProjection], default=UVProjection.NONE.value,
                        help="Overwrite UVs with an analytic projection.")
    parser.add_argument("--line-length", type=float, default=DEFAULT_LINE_MAGNITUDE,
                        help="Length factor of the debug lines.")
    parser.add_argument("--save", metavar="OUT.h5", help="Store the built mesh in an HDF5 file.")
    parser.add_argument("--show", action="store_true", help="Open a pyvista window with the vertex normals.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    # 2. Run the pipeline
    options = LoadOptions(file_format=args.file_format, projection=args.projection)
    result = load_with_options(args.model, options)
    if not result.ok:
        logger.error(f"Could not load '{args.model}': {result.error}")
        return 1
    mesh = result.mesh
    if args.line_length != DEFAULT_LINE_MAGNITUDE:
        mesh.set_normal_line_length(args.line_length)

    # 3. Summary of what a renderer would upload
    from meshframe.view.buffers import RenderBuffers

    buffers = RenderBuffers.from_mesh(mesh)
    print(f"{mesh.source}: {mesh.vertex_count} vertices, {mesh.face_count} triangles")
    for view in buffers.all_views():
        print(f"  {view.name:<18} count={view.count:<8} bytes={view.nbytes}")

    # 4. Optional outputs
    if args.save:
        from meshframe.model.io import MeshIO
        MeshIO.save(mesh, args.save)

    if args.show:
        from meshframe.view.vtk_utils import VtkUtils
        VtkUtils().show(mesh, ["vertex_normals", "vertex_tangents", "vertex_bitangents"])

    return 0


if __name__ == "__main__":
    sys.exit(main())

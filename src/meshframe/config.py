"""
Configuration & Constants
=========================
This module serves as the central registry for numeric constants, default
load options and the location of the bundled sample models.

Why is this file needed?
------------------------
1. Consistency: The degenerate-UV threshold and the default debug line length
   are shared by the pipeline, the CLI and the tests.
2. Deployment: It resolves the 'assets' directory both in development
   (src layout) and in a frozen build (sys._MEIPASS).

Exports:
    EPSILON (float): Threshold below which the UV determinant counts as zero.
    DEFAULT_LINE_MAGNITUDE (float): Initial length factor of the debug lines.
    VERTEX_FIELD_COUNT (int): Number of float slots of a vertex record.
    ASSETS_PATH (str): Absolute path to the assets directory.
    LoadOptions: Load-time configuration bundle.
"""
from __future__ import annotations

import sys
import os
from dataclasses import dataclass
from pathlib import Path

from meshframe.model.types import FileFormat, UVProjection

# Degenerate UV triangle threshold for the tangent-space determinant
EPSILON: float = 1e-6

DEFAULT_LINE_MAGNITUDE: float = 1.0

# px py pz | nx ny nz | tx ty tz | bx by bz | u v
VERTEX_FIELD_COUNT: int = 14

DEFAULT_FORMAT: FileFormat = FileFormat.OBJ
DEFAULT_PROJECTION: UVProjection = UVProjection.NONE


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/meshframe/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")


@dataclass(frozen=True)
class LoadOptions:
    """Everything the load call needs besides the file path."""
    file_format: FileFormat | str = DEFAULT_FORMAT
    projection: UVProjection | str = DEFAULT_PROJECTION
    line_magnitude: float = DEFAULT_LINE_MAGNITUDE

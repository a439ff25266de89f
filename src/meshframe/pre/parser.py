"""
Source Parser
=============
Reads a line-oriented text model file into raw vertex records and a
triangle index list.

Why is this file needed?
------------------------
1. Translation: It converts the text format into flat numpy arenas, the
   shape every later stage works on.
2. Triangulation: Polygons with more than three corners are fan-triangulated
   here, so the rest of the pipeline only ever sees triangles.

Only the position slots of a vertex record are authoritative; the remaining
slots are placeholders that later stages overwrite.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from meshframe.config import VERTEX_FIELD_COUNT
from meshframe.errors import FileOpenError, UnsupportedFormatError
from meshframe.model.types import FileFormat

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

VERTEX_MARKER = "v"
FACE_MARKER = "f"
SUB_INDEX_DELIMITER = "/"

# Slices into a (N, 14) vertex record array
POSITION_SLOTS = slice(0, 3)
NORMAL_SLOTS = slice(3, 6)
TANGENT_SLOTS = slice(6, 9)
BITANGENT_SLOTS = slice(9, 12)
UV_SLOTS = slice(12, 14)


@dataclass
class ParsedSource:
    """Raw result of parsing a model file."""
    records: npt.NDArray[np.float64]  # (N, 14)
    faces: npt.NDArray[np.int64]  # (F, 3), zero-based
    skipped_polygons: list[int] = field(default_factory=list)  # 1-based line numbers

    @property
    def positions(self) -> npt.NDArray[np.float64]:
        return self.records[:, POSITION_SLOTS]

    @property
    def uvs(self) -> npt.NDArray[np.float64]:
        return self.records[:, UV_SLOTS]


def _is_marked(line: str, marker: str) -> bool:
    """True for lines whose first character is `marker` followed by whitespace."""
    return line[:1] == marker and line[1:2].isspace()


def _parse_float(token: str) -> float:
    # Malformed numeric data is not validated; it surfaces as NaN in the output
    try:
        return float(token)
    except ValueError:
        return float("nan")


def fan_triangulate(indices: list[int]) -> list[tuple[int, int, int]]:
    """
    Split a polygon into N-2 triangles sharing its first corner.

    Example:
        fan_triangulate([0, 1, 2, 3]) -> [(0, 1, 2), (0, 2, 3)]
    """
    first = indices[0]
    return [(first, indices[i], indices[i + 1]) for i in range(1, len(indices) - 1)]


def parse_obj_lines(lines: Iterable[str]) -> ParsedSource:
    """
    Parse the OBJ-style vertex ('v') and face ('f') lines of a model.

    Every other line ('vt', 'vn', comments, groups, ...) is ignored.
    Polygons that cannot be used (fewer than three corners, non-integer
    corners, corners referencing a missing vertex) are skipped and their
    line numbers reported in ``skipped_polygons``.
    """
    records: list[npt.NDArray[np.float64]] = []
    polygons: list[tuple[int, list[int]]] = []  # (line number, zero-based corners)
    skipped: list[int] = []

    for line_number, line in enumerate(lines, start=1):
        if _is_marked(line, VERTEX_MARKER):
            tokens = line[1:].split()
            if len(tokens) > VERTEX_FIELD_COUNT:
                logger.debug(f"Line {line_number}: ignoring {len(tokens) - VERTEX_FIELD_COUNT} extra vertex fields.")
            record = np.zeros(VERTEX_FIELD_COUNT, dtype=np.float64)
            for slot, token in enumerate(tokens[:VERTEX_FIELD_COUNT]):
                record[slot] = _parse_float(token)
            records.append(record)

        elif _is_marked(line, FACE_MARKER):
            tokens = line[1:].split()
            try:
                # Texture/normal sub-indices ("1/2/3") are discarded
                corners = [int(token.split(SUB_INDEX_DELIMITER)[0]) - 1 for token in tokens]
            except ValueError:
                logger.warning(f"Line {line_number}: face has a non-integer index, skipping it.")
                skipped.append(line_number)
                continue
            if len(corners) < 3:
                logger.warning(f"Line {line_number}: face has {len(corners)} indices, at least 3 are required.")
                skipped.append(line_number)
                continue
            polygons.append((line_number, corners))

    n_vertices = len(records)
    triangles: list[tuple[int, int, int]] = []
    for line_number, corners in polygons:
        if min(corners) < 0 or max(corners) >= n_vertices:
            logger.warning(
                f"Line {line_number}: face references a vertex outside 1..{n_vertices}, skipping it."
            )
            skipped.append(line_number)
            continue
        triangles.extend(fan_triangulate(corners))

    vertex_array = (
        np.vstack(records) if records else np.zeros((0, VERTEX_FIELD_COUNT), dtype=np.float64)
    )
    face_array = np.array(triangles, dtype=np.int64).reshape(-1, 3)
    return ParsedSource(records=vertex_array, faces=face_array, skipped_polygons=sorted(skipped))


def parse_obj(path: str) -> ParsedSource:
    """Open an OBJ file and parse it. Raises FileOpenError if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return parse_obj_lines(f)
    except OSError as e:
        raise FileOpenError(f"File failed to open: {path} ({e.strerror or e})", path=path) from e


FORMAT_PARSERS: dict[FileFormat, Callable[[str], ParsedSource]] = {
    FileFormat.OBJ: parse_obj,
}


def resolve_format(tag: FileFormat | str) -> FileFormat:
    """Coerce a format tag to FileFormat, raising UnsupportedFormatError otherwise."""
    try:
        file_format = FileFormat(str(tag).lower())
    except ValueError:
        raise UnsupportedFormatError(str(tag)) from None
    if file_format not in FORMAT_PARSERS:
        raise UnsupportedFormatError(str(tag))
    return file_format


def parse_source(path: str, tag: FileFormat | str) -> ParsedSource:
    """Dispatch to the parser registered for the declared format."""
    file_format = resolve_format(tag)
    logger.debug(f"Parsing '{path}' as {file_format.value.upper()}.")
    parsed = FORMAT_PARSERS[file_format](path)
    logger.debug(f"Parsed {len(parsed.records)} vertices and {len(parsed.faces)} triangles.")
    return parsed

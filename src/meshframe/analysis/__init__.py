"""
The ANALYSIS layer derives the differential-geometry attributes of a mesh:
vertex adjacency, normals, tangent frames and their debug line geometry.

Note: This package is pure NumPy and never imports the view layer.
"""

"""
The VIEW layer is the boundary towards the rendering collaborator: packed
GPU-ready buffers, pyvista conversion and matplotlib inspection plots.
"""

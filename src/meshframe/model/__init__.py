"""
The MODEL layer contains the mesh data structures.
It has NO knowledge of the rendering collaborator (pyvista, GPU buffers).
It deals with the vertex/face arenas, their derived attributes and I/O.
"""

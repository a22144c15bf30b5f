"""Bounding volume hierarchies, a top-level acceleration structure and ray casting over triangle meshes."""

__version__ = "0.2.0"
"""
The MODEL layer contains pure data structures and business logic.
It never draws anything (previews live in `mobjectwrapper.rendering.preview`).
It deals with Geometry, Kinds, the Mobject handle and I/O.
"""

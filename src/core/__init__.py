"""
Core mathematical primitives and their serialized contracts.

Pure, in-memory value types with no dependency on external systems.
"""

"""Domain models and value types.

Pure data structures (Pydantic v2): no subprocess, no CLI, no Rich.
"""

"""Core modules for narray."""

__all__ = [
    "array",
    "backend",
    "config",
    "conform",
    "contraction",
    "exceptions",
    "extract",
    "idx",
    "layout",
    "planner",
]

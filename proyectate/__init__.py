"""Proyectate - personal project and task tracking.

Projects own an ordered forest of tasks of arbitrary depth. The
domain layer keeps every mutation copy-on-write so callers always
hold a complete, immutable snapshot of the state.
"""

__version__ = "0.1.0"

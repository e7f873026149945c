"""Infrastructure layer for Proyectate.

External collaborators of the core: JSON persistence, AI assistants
and blob encoding. Failures are reported as Results, never raised.
"""

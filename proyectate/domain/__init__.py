"""Domain layer for Proyectate.

Pure models and functions with no I/O. Subpackages:

    shared - Result monad and error taxonomy
    task - Task forest models and tree primitives
    project - Project aggregate and application state
    user - User roster
"""

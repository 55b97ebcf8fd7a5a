"""
Core matrix model, arithmetic, and text format.

This package is independent of the interactive shell: it never prints or
logs, and every failure is reported through the MatrixError hierarchy.
"""

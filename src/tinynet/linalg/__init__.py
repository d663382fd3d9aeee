"""
Linear Algebra Package

This package provides the dense matrix engine on which the neural
network is built.

Exported Classes:
    Matrix: Dense two-dimensional matrix of float64 values
"""

from tinynet.linalg.matrix import Matrix

__all__ = ['Matrix']

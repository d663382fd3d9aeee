"""
Errors Module

Exception types raised by the matrix engine and the neural network.
All of them are caller errors: they are raised synchronously, at the point
of the offending call, and no partial result is ever produced.

Classes:
    TinynetError:           Base class for all package errors
    InvalidShapeError:      A matrix was requested with an unusable shape
    ShapeMismatchError:     Matrix operands have incompatible shapes
    DimensionMismatchError: An input/target vector disagrees with the network's node counts
"""

class TinynetError(Exception):
    """Base class for all errors raised by tinynet."""

class InvalidShapeError(TinynetError, ValueError):
    """Non-positive matrix dimensions, or ragged rows."""

class ShapeMismatchError(TinynetError, ValueError):
    """Matrix product or elementwise operation on incompatible shapes."""

class DimensionMismatchError(TinynetError, ValueError):
    """Input or target length differs from the declared number of nodes."""

"""
Matrix Module

This module implements the dense two-dimensional matrix used by the network
for all of its computation: the weights and biases are matrices, and inputs,
targets and layer activations are turned into single-column matrices.

Every operation returns a new matrix; a Matrix never changes shape or content
after construction. Non-elementwise transforms (transpose, product) are built
on a single indexed-map primitive over a freshly allocated zero matrix, so the
shape bookkeeping lives in one place.

Classes:
    Matrix: Dense rows x cols grid of float64 values
"""

import numpy as np
from typing import Callable, Iterable, Sequence

from tinynet.errors import InvalidShapeError, ShapeMismatchError

class Matrix:
    """
    A dense, immutable, two-dimensional matrix of real numbers.

    Values are stored as a float64 numpy array owned exclusively by the
    instance; no two Matrix objects ever share storage.

    Public Attributes:
        rows: Number of rows
        cols: Number of columns

    Public Properties:
        shape:  The (rows, cols) pair
        values: A copy of the entries, as a (rows, cols) numpy array

    Public Methods:
        from_sequence(values):   Column matrix from a flat sequence (class method)
        from_rows(rows):         Matrix from nested rows (class method)
        product(a, b):           Matrix multiplication (static method)
        to_sequence():           Flatten row-major into a list
        to_list():               Nested list of rows
        map(func):               Apply func(value) to every entry
        map_indexed(func):       Apply func(value, row, col) to every entry
        transpose():             The transposed matrix
        add_scalar(n), scale(n): Elementwise add / multiply by a scalar
        add_elementwise(other):  Elementwise sum of same-shaped matrices
        subtract_elementwise(other): Elementwise difference of same-shaped matrices
        hadamard(other):         Elementwise product of same-shaped matrices
        randomize(uniform, low, high): Entries drawn from an injected uniform generator
        copy():                  Independent deep copy
    """

    __hash__ = None

    def __init__(self, rows: int, cols: int):
        """
        Create a rows x cols matrix with all entries equal to zero.

        Parameters:
            rows: Number of rows (must be positive)
            cols: Number of columns (must be positive)
        """
        if rows < 1 or cols < 1:
            raise InvalidShapeError(f"Matrix dimensions must be positive, got {rows}x{cols}")

        self.rows   : int        = rows
        self.cols   : int        = cols
        self._values: np.ndarray = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'Matrix':
        """
        Build a column matrix (len(values) x 1) from a flat sequence.
        Used to turn an input or target vector into matrix form.
        """
        values = list(values)
        return cls(len(values), 1).map_indexed(lambda _, i, j: values[i])

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> 'Matrix':
        """
        Build a matrix from nested rows; every row must have the same length.
        """
        rows = [list(row) for row in rows]
        if not rows:
            raise InvalidShapeError("Cannot build a matrix from zero rows")

        num_cols = len(rows[0])
        if any(len(row) != num_cols for row in rows):
            raise InvalidShapeError("All rows must have the same number of columns")

        return cls(len(rows), num_cols).map_indexed(lambda _, i, j: rows[i][j])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def values(self) -> np.ndarray:
        """A copy of the entries; modifying it does not affect the matrix."""
        return self._values.copy()

    def to_sequence(self) -> list[float]:
        """
        Flatten the matrix row-major into a list.
        This is the inverse of 'from_sequence' for column matrices.
        """
        return [float(value) for value in self._values.flat]

    def to_list(self) -> list[list[float]]:
        return [[float(value) for value in row] for row in self._values]

    def map(self, func: Callable[[float], float]) -> 'Matrix':
        """
        Return a new matrix with 'func' applied to every entry.
        The receiver is left unchanged.
        """
        return self.map_indexed(lambda value, i, j: func(value))

    def map_indexed(self, func: Callable[[float, int, int], float]) -> 'Matrix':
        """
        Return a new matrix, of the same shape as the receiver, whose entry
        at (i, j) is func(value, i, j), 'value' being the receiver's entry.

        Parameters:
            func: Callable receiving the current value, the row and the column index

        Returns:
            The new matrix
        """
        result = Matrix(self.rows, self.cols)
        for i in range(self.rows):
            for j in range(self.cols):
                result._values[i, j] = func(self._values[i, j], i, j)
        return result

    def transpose(self) -> 'Matrix':
        """Return the cols x rows matrix with result[i][j] = self[j][i]."""
        source = self._values
        return Matrix(self.cols, self.rows).map_indexed(lambda _, i, j: source[j, i])

    @staticmethod
    def product(a: 'Matrix', b: 'Matrix') -> 'Matrix':
        """
        Standard matrix multiplication.

        Parameters:
            a: Left operand, of shape (m, n)
            b: Right operand, of shape (n, p)

        Returns:
            The (m, p) matrix with result[i][j] = sum_k a[i][k] * b[k][j]
        """
        if a.cols != b.rows:
            raise ShapeMismatchError(f"Cannot multiply a {a.rows}x{a.cols} matrix "
                                     f"by a {b.rows}x{b.cols} matrix")

        left, right = a._values, b._values
        return Matrix(a.rows, b.cols).map_indexed(lambda _, i, j: np.dot(left[i, :], right[:, j]))

    def add_scalar(self, n: float) -> 'Matrix':
        return self.map(lambda value: value + n)

    def scale(self, n: float) -> 'Matrix':
        return self.map(lambda value: value * n)

    def add_elementwise(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "add")
        values = other._values
        return self.map_indexed(lambda value, i, j: value + values[i, j])

    def subtract_elementwise(self, other: 'Matrix') -> 'Matrix':
        self._check_same_shape(other, "subtract")
        values = other._values
        return self.map_indexed(lambda value, i, j: value - values[i, j])

    def hadamard(self, other: 'Matrix') -> 'Matrix':
        """Elementwise (Hadamard) product of two matrices with identical shape."""
        self._check_same_shape(other, "multiply elementwise")
        values = other._values
        return self.map_indexed(lambda value, i, j: value * values[i, j])

    def randomize(self,
                  uniform: Callable[[float, float], float],
                  low    : float = -1.0,
                  high   : float =  1.0) -> 'Matrix':
        """
        Return a matrix of the receiver's shape with every entry drawn
        from the injected generator, as uniform(low, high).
        """
        return self.map(lambda _: uniform(low, high))

    def copy(self) -> 'Matrix':
        """Return an independent copy; the two never share storage."""
        source = self._values
        return Matrix(self.rows, self.cols).map_indexed(lambda _, i, j: source[i, j])

    def _check_same_shape(self, other: 'Matrix', operation: str):
        if self.shape != other.shape:
            raise ShapeMismatchError(f"Cannot {operation} a {self.rows}x{self.cols} matrix "
                                     f"and a {other.rows}x{other.cols} matrix")

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._values[i, j])

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    def __repr__(self):
        return f"Matrix(rows={self.rows}, cols={self.cols}, values={self.to_list()})"

    def __str__(self):
        return "\n".join("  ".join(f"{value:+.4f}" for value in row) for row in self._values)

"""
Unit tests for basic activation functions and their derivatives.

Derivatives are written in terms of the activated output y; they are checked
against autograd's derivative of the activation itself.
"""

import math
import pytest
import numpy as np
from autograd import grad  # type: ignore
from tinynet.activations.basic_activations import (
    sigmoid_activation,
    sigmoid_derivative,
    tanh_activation,
    tanh_derivative,
    identity_activation,
    identity_derivative,
    relu_activation,
    relu_derivative,
    activations,
    derivatives,
)


SAMPLE_POINTS = [-4.0, -1.5, -0.3, 0.0, 0.2, 1.0, 3.7]


class TestActivationsDictionary:
    """Test that activations and derivatives are registered in pairs."""

    def test_same_names(self):
        """Every activation has a derivative and vice versa."""
        assert set(activations) == set(derivatives)

    def test_expected_names(self):
        for name in ['sigmoid', 'tanh', 'identity', 'relu']:
            assert name in activations, f"{name} not found in activations dictionary"

    def test_dictionary_functions_callable(self):
        for name in activations:
            assert callable(activations[name]), f"{name} is not callable"
            assert callable(derivatives[name]), f"{name} derivative is not callable"


class TestSigmoidActivation:
    """Test the logistic function."""

    def test_zero(self):
        """Test sigmoid at zero is exactly 0.5."""
        assert sigmoid_activation(0.0) == 0.5

    def test_matches_formula(self):
        for z in SAMPLE_POINTS:
            assert sigmoid_activation(z) == pytest.approx(1.0 / (1.0 + math.exp(-z)))

    def test_not_integer_truncated(self):
        """Test integer inputs give real-valued outputs."""
        assert 0.7 < sigmoid_activation(1) < 0.75

    def test_large_values_do_not_overflow(self):
        with np.errstate(over='raise'):
            assert sigmoid_activation(-1000.0) == pytest.approx(0.0)
            assert sigmoid_activation(1000.0) == pytest.approx(1.0)

    def test_output_range(self):
        for z in [-10, -1, 0, 1, 10]:
            assert 0 < sigmoid_activation(z) < 1

    @pytest.mark.parametrize("z", SAMPLE_POINTS)
    def test_derivative_matches_autograd(self, z):
        """Test derivative(activate(x)) equals d/dx activate(x)."""
        expected = grad(sigmoid_activation)(z)
        assert sigmoid_derivative(sigmoid_activation(z)) == pytest.approx(expected, rel=1e-9)

    def test_derivative_analytic(self):
        """Test derivative(y) == y * (1 - y)."""
        assert sigmoid_derivative(0.5) == 0.25
        assert sigmoid_derivative(0.9) == pytest.approx(0.09)


class TestTanhActivation:
    """Test the hyperbolic tangent."""

    def test_zero(self):
        assert tanh_activation(0.0) == 0.0

    def test_odd_function(self):
        for z in SAMPLE_POINTS:
            assert tanh_activation(-z) == pytest.approx(-tanh_activation(z))

    @pytest.mark.parametrize("z", SAMPLE_POINTS)
    def test_derivative_matches_autograd(self, z):
        expected = grad(tanh_activation)(z)
        assert tanh_derivative(tanh_activation(z)) == pytest.approx(expected, rel=1e-9)

    def test_derivative_analytic(self):
        """Test derivative(y) == 1 - y**2."""
        assert tanh_derivative(0.0) == 1.0
        assert tanh_derivative(0.5) == 0.75


class TestIdentityActivation:

    def test_passthrough(self):
        assert identity_activation(-2.5) == -2.5

    def test_derivative_is_one(self):
        for y in SAMPLE_POINTS:
            assert identity_derivative(y) == 1.0


class TestReluActivation:

    def test_values(self):
        assert relu_activation(-1.0) == 0.0
        assert relu_activation(0.0) == 0.0
        assert relu_activation(2.0) == 2.0

    @pytest.mark.parametrize("z", [-2.0, -0.1, 0.1, 2.0])
    def test_derivative_matches_autograd(self, z):
        expected = grad(relu_activation)(z)
        assert relu_derivative(relu_activation(z)) == pytest.approx(expected)

import autograd.numpy as np  # type: ignore

# Derivatives are expressed in terms of the *activated* output y,
# following the usual backpropagation convention.

def sigmoid_activation(z):
    z = np.clip(z, -500, 500)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def sigmoid_derivative(y):
    return y * (1.0 - y)

def tanh_activation(z):
    return np.tanh(z)

def tanh_derivative(y):
    return 1.0 - y ** 2

def identity_activation(z):
    return z

def identity_derivative(y):
    return 1.0

def relu_activation(z):
    return np.maximum(0.0, z)

def relu_derivative(y):
    return 1.0 if y > 0 else 0.0

activations = {
    "sigmoid" : sigmoid_activation,
    "tanh"    : tanh_activation,
    "identity": identity_activation,
    "relu"    : relu_activation
    }

derivatives = {
    "sigmoid" : sigmoid_derivative,
    "tanh"    : tanh_derivative,
    "identity": identity_derivative,
    "relu"    : relu_derivative
    }

"""
Activation Function Module

This module implements ActivationFunction, the capability object a network
uses pointwise during its forward and backward passes. It bundles a forward
function with its derivative, the latter expressed in terms of the activated
output (e.g. y * (1 - y) for the logistic function).

Classes:
    ActivationFunction: Immutable (activate, derivative) pair
"""

from typing import Callable

from tinynet.activations.basic_activations import activations, derivatives

class ActivationFunction:
    """
    An activation function paired with its derivative.

    Instances are immutable and stateless, so a single instance can be shared
    freely between networks. The presets are built explicitly through the
    class methods below; custom pairs can be supplied with 'custom'.

    Public Attributes:
        name: Name of the activation function (e.g. 'sigmoid', 'tanh')

    Public Methods:
        activate(x):    Forward function
        derivative(y):  Derivative of the forward function, in terms of its output y
        sigmoid():      The logistic preset (class method)
        tanh():         The hyperbolic tangent preset (class method)
        from_name(name):                    Preset looked up by name (class method)
        custom(activate, derivative, name): A caller-supplied pair (class method)
    """

    __slots__ = ('_name', '_activate', '_derivative')

    def __init__(self,
                 name      : str,
                 activate  : Callable[[float], float],
                 derivative: Callable[[float], float]):
        """
        Parameters:
            name:       Name of the activation function
            activate:   The forward function, x -> y
            derivative: The derivative, written in terms of the output y
        """
        object.__setattr__(self, '_name', name)
        object.__setattr__(self, '_activate', activate)
        object.__setattr__(self, '_derivative', derivative)

    @classmethod
    def sigmoid(cls) -> 'ActivationFunction':
        return cls.from_name('sigmoid')

    @classmethod
    def tanh(cls) -> 'ActivationFunction':
        return cls.from_name('tanh')

    @classmethod
    def from_name(cls, name: str) -> 'ActivationFunction':
        if name not in activations:
            raise ValueError(f"Unknown activation function '{name}'. "
                             f"Use one of: {', '.join(activations)}")
        return cls(name, activations[name], derivatives[name])

    @classmethod
    def custom(cls,
               activate  : Callable[[float], float],
               derivative: Callable[[float], float],
               name      : str = "custom") -> 'ActivationFunction':
        return cls(name, activate, derivative)

    @property
    def name(self) -> str:
        return self._name

    def activate(self, x: float) -> float:
        return self._activate(x)

    def derivative(self, y: float) -> float:
        return self._derivative(y)

    def __setattr__(self, name, value):
        raise AttributeError("ActivationFunction is immutable")

    def __eq__(self, other):
        if not isinstance(other, ActivationFunction):
            return NotImplemented
        return (self._name, self._activate, self._derivative) == \
               (other._name, other._activate, other._derivative)

    def __hash__(self):
        return hash((self._name, self._activate, self._derivative))

    def __repr__(self):
        return f"ActivationFunction(name={self._name!r})"

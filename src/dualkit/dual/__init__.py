"""Dual-number algebra: the number type, its promotion rules and elementary functions."""

from .functions import absolute, cos, exp, log, sin, sqrt, square, tan, tanh
from .number import DualNumber, apply_rule, derivative_of, lift, seed, value_of
from .rules import ElementaryRule, available_rules, register_rule, resolve_rule

__all__ = [
    "DualNumber",
    "ElementaryRule",
    "apply_rule",
    "available_rules",
    "derivative_of",
    "lift",
    "register_rule",
    "resolve_rule",
    "seed",
    "value_of",
    "sin",
    "cos",
    "tan",
    "exp",
    "log",
    "sqrt",
    "tanh",
    "absolute",
    "square",
]

"""Provides the registry of derivative rules for elementary functions.

Every unary elementary function that can act on a
:class:`~dualkit.dual.number.DualNumber` is described by an
:class:`ElementaryRule`: how to evaluate it, how to evaluate its
derivative, and where it is defined. Rules are looked up by name, so the
same table serves the module-level functions in :mod:`dualkit.dual.functions`,
the methods on ``DualNumber`` and numpy ufuncs such as ``np.sin``.

Adding rules
------------
New rules can be registered at run time:

    >>> import math
    >>> from dualkit.dual.rules import ElementaryRule, register_rule
    >>> register_rule(
    ...     "sinh",
    ...     ElementaryRule(
    ...         name="sinh",
    ...         primal=math.sinh,
    ...         slope=lambda a, fa: math.cosh(a),
    ...     ),
    ... )

Notes:
    - Rule names are case/spacing/punctuation insensitive.
    - Registering a name that already exists replaces the rule and logs a
      warning on ``dualkit_logger``.
    - For available canonical rule names at runtime, call
      ``available_rules()``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Iterable, Mapping

import numpy as np

from dualkit.errors import DivisionByZero, DomainError, UnsupportedOperation
from dualkit.logger import dualkit_logger

__all__ = [
    "ElementaryRule",
    "register_rule",
    "resolve_rule",
    "available_rules",
]


@dataclass(frozen=True)
class ElementaryRule:
    """Derivative rule of a unary elementary function.

    Attributes:
        name: Canonical name of the function.
        primal: Evaluates the function at a real scalar ``a``.
        slope: Evaluates the derivative at ``a``, given ``fa = primal(a)``.
            It may raise if the derivative does not exist at ``a`` even
            though the function value does.
        check: Optional domain check, called with ``a`` before ``primal``.
            Raises :class:`~dualkit.errors.DomainError` outside the domain.
    """
    name: str
    primal: Callable[[Any], Any]
    slope: Callable[[Any, Any], Any]
    check: Callable[[Any], None] | None = None

    def value(self, a: Any) -> Any:
        """Evaluates the function at ``a`` after the domain check."""
        if self.check is not None:
            self.check(a)
        return self.primal(a)


def _scalar_function(np_func: Callable, math_func: Callable) -> Callable[[Any], Any]:
    """Builds a scalar function that keeps numpy precision for numpy scalars.

    Args:
        np_func: Numpy ufunc used for numpy scalars.
        math_func: ``math`` function used for Python numbers.

    Returns:
        Callable dispatching on the type of its argument.
    """
    def evaluate(a):
        if isinstance(a, np.generic):
            return np_func(a)
        return math_func(a)

    evaluate.__name__ = math_func.__name__
    return evaluate


_sin = _scalar_function(np.sin, math.sin)
_cos = _scalar_function(np.cos, math.cos)
_tan = _scalar_function(np.tan, math.tan)
_exp = _scalar_function(np.exp, math.exp)
_log = _scalar_function(np.log, math.log)
_sqrt = _scalar_function(np.sqrt, math.sqrt)
_tanh = _scalar_function(np.tanh, math.tanh)


def _check_log(a: Any) -> None:
    if a <= 0:
        raise DomainError(f"log is only defined for positive arguments; got {a!r}.")


def _check_sqrt(a: Any) -> None:
    if a < 0:
        raise DomainError(f"sqrt is only defined for non-negative arguments; got {a!r}.")


def _sqrt_slope(a: Any, fa: Any) -> Any:
    if fa == 0:
        raise DivisionByZero("the derivative of sqrt is unbounded at 0.")
    return 1 / (2 * fa)


def _abs_slope(a: Any, fa: Any) -> int:
    if a == 0:
        raise DomainError("abs is not differentiable at 0.")
    return 1 if a > 0 else -1


# Built-in rules. Names match the numpy ufunc names where one exists.
_RULE_SPECS: list[tuple[str, ElementaryRule, list[str]]] = [
    ("sin", ElementaryRule("sin", _sin, lambda a, fa: _cos(a)), []),
    ("cos", ElementaryRule("cos", _cos, lambda a, fa: -_sin(a)), []),
    ("tan", ElementaryRule("tan", _tan, lambda a, fa: 1 + fa * fa), []),
    ("exp", ElementaryRule("exp", _exp, lambda a, fa: fa), []),
    ("log", ElementaryRule("log", _log, lambda a, fa: 1 / a, _check_log), ["ln"]),
    ("sqrt", ElementaryRule("sqrt", _sqrt, _sqrt_slope, _check_sqrt), []),
    ("tanh", ElementaryRule("tanh", _tanh, lambda a, fa: 1 - fa * fa), []),
    ("abs", ElementaryRule("abs", abs, _abs_slope), ["absolute"]),
    ("square", ElementaryRule("square", lambda a: a * a, lambda a, fa: 2 * a), []),
]


def _norm(s: str) -> str:
    """Normalizes a rule name for robust matching (case/spacing/punct insensitive).

    Args:
        s: Input string.

    Returns:
        Normalized string.
    """
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _rule_maps() -> tuple[Mapping[str, ElementaryRule], tuple[str, ...]]:
    """Constructs and caches lookup tables for derivative rules.

    Later registrations win over earlier ones with the same name. The cache
    is cleared by ``register_rule``.

    Returns:
        A pair ``(rule_map, canonical_names)`` where ``rule_map`` maps
        normalized names and aliases to rules and ``canonical_names`` lists
        the sorted canonical rule names.
    """
    rule_map: dict[str, ElementaryRule] = {}
    canonical: set[str] = set()
    for name, rule, aliases in _RULE_SPECS:
        k = _norm(name)
        rule_map[k] = rule
        canonical.add(k)
        for a in aliases:
            rule_map[_norm(a)] = rule
    return rule_map, tuple(sorted(canonical))


def register_rule(
    name: str,
    rule: ElementaryRule,
    *,
    aliases: Iterable[str] = (),
) -> None:
    """Registers a derivative rule for a unary elementary function.

    After registration the rule is available through
    :func:`dualkit.dual.number.apply_rule`, and through numpy ufuncs whose
    ``__name__`` matches ``name`` or one of the aliases.

    Args:
        name: Canonical public name of the function (e.g. ``"sinh"``).
        rule: The rule describing the function.
        aliases: Additional accepted spellings.
    """
    rule_map, _ = _rule_maps()
    for key in (name, *aliases):
        if _norm(key) in rule_map:
            dualkit_logger.warning("Replacing the existing derivative rule for %r.", key)
    _RULE_SPECS.append((name, rule, list(aliases)))
    _rule_maps.cache_clear()


def resolve_rule(name: str) -> ElementaryRule:
    """Resolves a function name or alias to its derivative rule.

    Args:
        name: Function name or alias.

    Returns:
        The registered rule.

    Raises:
        UnsupportedOperation: If no rule is registered under ``name``.
    """
    rule_map, canon = _rule_maps()
    try:
        return rule_map[_norm(name)]
    except KeyError:
        opts = ", ".join(canon)
        raise UnsupportedOperation(
            f"No derivative rule registered for '{name}'. Available: {{{opts}}}."
        ) from None


def available_rules() -> list[str]:
    """Lists canonical rule names.

    Returns:
        List of rule names.
    """
    _, canon = _rule_maps()
    return list(canon)

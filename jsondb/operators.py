"""Arithmetic applied in place by `JsonDB.math`."""
import math
import operator
import random
from enum import Enum
from numbers import Real
from typing import Any, Callable

from jsondb.errors import TypeMismatch, UnknownOperator


class Operator(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EXPONENT = "exponent"
    MODULO = "modulo"
    RANDOM = "random"

    @classmethod
    def resolve(cls, name: "str | Operator") -> "Operator":
        """Map an operator name or one of its aliases onto its member."""
        if isinstance(name, cls):
            return name
        try:
            return ALIASES[str(name).strip().lower()]
        except KeyError:
            raise UnknownOperator(f"Unknown math operator: {name!r}") from None


ALIASES: dict[str, Operator] = {
    "add": Operator.ADD,
    "addition": Operator.ADD,
    "+": Operator.ADD,
    "sub": Operator.SUBTRACT,
    "subtract": Operator.SUBTRACT,
    "-": Operator.SUBTRACT,
    "mult": Operator.MULTIPLY,
    "multiply": Operator.MULTIPLY,
    "*": Operator.MULTIPLY,
    "div": Operator.DIVIDE,
    "divide": Operator.DIVIDE,
    "/": Operator.DIVIDE,
    "exp": Operator.EXPONENT,
    "exponent": Operator.EXPONENT,
    "^": Operator.EXPONENT,
    "mod": Operator.MODULO,
    "modulo": Operator.MODULO,
    "%": Operator.MODULO,
    "rand": Operator.RANDOM,
    "random": Operator.RANDOM,
}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _divide(base, operand):
    if operand == 0:
        if base == 0 or (isinstance(base, float) and math.isnan(base)):
            return math.nan
        return (math.inf if base > 0 else -math.inf) * math.copysign(1.0, operand)
    return base / operand


def _modulo(base, operand):
    if operand == 0:
        return math.nan
    return base % operand


def _exponent(base, operand):
    try:
        result = base ** operand
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        if isinstance(operand, int):
            odd = operand % 2 == 1
        else:
            odd = operand.is_integer() and int(operand) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    if isinstance(result, complex):
        return math.nan
    return result


def _random(base, operand):
    if not math.isfinite(operand):
        return math.nan
    return math.floor(random.random() * math.floor(operand))


_IMPLEMENTATIONS: dict[Operator, Callable[[Any, Any], Any]] = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: _divide,
    Operator.EXPONENT: _exponent,
    Operator.MODULO: _modulo,
    Operator.RANDOM: _random,
}


def apply(op: "str | Operator", base: Any, operand: Any) -> Any:
    op = Operator.resolve(op)
    if not _is_number(operand):
        raise TypeMismatch(f"Operand must be a number, got {type(operand).__name__}")
    if op is not Operator.RANDOM and not _is_number(base):
        raise TypeMismatch(f"Cannot apply {op.value!r} to {type(base).__name__}")
    return _IMPLEMENTATIONS[op](base, operand)

"""Runtime values produced by the evaluator.

Errors are values, not exceptions: an Error is returned up the tree like any other object and every composite evaluation
step checks for it before going on. ReturnValue is the internal signal a 'return' statement leaves behind; it is unwrapped
at the function-call boundary (or at the top of the program) and never bound to a name.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    ERROR = "ERROR"

    def __str__(self):
        return self.value


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """ObjectType tag of this value."""

    @abstractmethod
    def inspect(self):
        """Human-readable rendering of this value, as printed by the shell."""

    def __str__(self):
        return self.inspect()


def wrap_int64(value):
    """Wraps value around to a signed 64-bit integer."""
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


@dataclass(frozen=True)
class Integer(Object):
    value: int

    @property
    def type(self):
        return ObjectType.INTEGER

    def inspect(self):
        return str(self.value)


class Boolean(Object):
    """There are exactly two Booleans, TRUE and FALSE, so that == and != can compare booleans by identity."""

    def __init__(self, value):
        self.value = value

    @property
    def type(self):
        return ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"

    def __repr__(self):
        return f"Boolean({self.value})"


class Null(Object):

    @property
    def type(self):
        return ObjectType.NULL

    def inspect(self):
        return "null"

    def __repr__(self):
        return "Null()"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value):
    return TRUE if value else FALSE


@dataclass(frozen=True)
class ReturnValue(Object):
    value: Object

    @property
    def type(self):
        return ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A closure: parameters and body of a function literal, plus the environment it was defined in (shared, not
    copied).
    """
    parameters: tuple
    body: object
    env: object

    @property
    def type(self):
        return ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"function({params}) {{\n{self.body}\n}}"


@dataclass(frozen=True)
class Error(Object):
    message: str

    @property
    def type(self):
        return ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"


def is_error(obj):
    return isinstance(obj, Error)

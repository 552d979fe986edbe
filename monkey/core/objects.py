"""Runtime values of the Monkey language.

The value set is closed: Integer, Boolean, Null, String, Array, Hash, Function, Builtin, plus two internal carriers,
ReturnValue (unwinds `return` out of nested blocks up to the enclosing function call) and Error (an evaluation
error, passed around as an ordinary value and checked at every step rather than raised).

Booleans and null are singletons (TRUE, FALSE, NULL): the evaluator compares booleans by identity.
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple

from monkey.core import ast
from monkey.core.environment import Environment


INT_BITS = 64
UINT_MASK = (1 << INT_BITS) - 1

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3


def wrap_int(value):
    """Wraps a Python int to a signed 64-bit integer, like native fixed-precision arithmetic."""
    value &= UINT_MASK
    if value >> (INT_BITS - 1):
        value -= 1 << INT_BITS
    return value


def fnv1a_64(data):
    """64-bit FNV-1a hash of data (bytes)."""
    result = FNV_OFFSET_BASIS
    for byte in data:
        result ^= byte
        result = (result * FNV_PRIME) & UINT_MASK
    return result


class ObjectType(enum.Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    STRING = "STRING"
    ARRAY = "ARRAY"
    HASH = "HASH"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self):
        return self.value


class HashKey(NamedTuple):
    """Comparable key of a hashable Object: its type tag plus a 64-bit hash."""
    type: ObjectType
    value: int


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """ObjectType tag of this value."""

    @abstractmethod
    def inspect(self):
        """Display form, as printed by the REPL and `puts`."""

    def __str__(self):
        return self.inspect()


class Hashable(ABC):
    """Capability of values usable as Hash keys."""

    @abstractmethod
    def hash_key(self):
        """Returns the HashKey of this value. Equal values have equal keys."""


@dataclass
class Integer(Object, Hashable):
    value: int

    @property
    def type(self):
        return ObjectType.INTEGER

    def inspect(self):
        return str(self.value)

    def hash_key(self):
        return HashKey(self.type, self.value & UINT_MASK)  # two's complement bit pattern


@dataclass(eq=False)
class Boolean(Object, Hashable):
    value: bool

    @property
    def type(self):
        return ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"

    def hash_key(self):
        return HashKey(self.type, 1 if self.value else 0)


class Null(Object):

    @property
    def type(self):
        return ObjectType.NULL

    def inspect(self):
        return "null"

    def __repr__(self):
        return "Null()"


@dataclass
class String(Object, Hashable):
    value: str

    @property
    def type(self):
        return ObjectType.STRING

    def inspect(self):
        return self.value

    def hash_key(self):
        return HashKey(self.type, fnv1a_64(self.value.encode("utf-8")))


@dataclass
class Array(Object):
    elements: List[Object] = field(default_factory=list)

    @property
    def type(self):
        return ObjectType.ARRAY

    def inspect(self):
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


class HashPair(NamedTuple):
    key: Object
    value: Object


@dataclass
class Hash(Object):
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    @property
    def type(self):
        return ObjectType.HASH

    def inspect(self):
        return "{" + ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values()) + "}"


@dataclass(eq=False)
class Function(Object):
    """User-defined function. env is the Environment the function literal was evaluated in, shared, not copied."""
    parameters: List[ast.Identifier]
    body: ast.BlockStatement
    env: Environment

    @property
    def type(self):
        return ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        body = "; ".join(str(stmt) for stmt in self.body.statements)
        return f"fn({params}) {{\n{body}\n}}"

    def __repr__(self):
        return f"Function({self.inspect()!r})"


@dataclass(eq=False)
class Builtin(Object):
    """Native function taking any number of Objects and returning an Object."""
    fn: Callable[..., Object]
    name: str = ""

    @property
    def type(self):
        return ObjectType.BUILTIN

    def inspect(self):
        return "builtin function"


@dataclass
class ReturnValue(Object):
    value: Object

    @property
    def type(self):
        return ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass
class Error(Object):
    message: str

    @property
    def type(self):
        return ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value):
    """Returns the TRUE or FALSE singleton."""
    return TRUE if value else FALSE


def is_error(obj):
    return obj is not None and obj.type is ObjectType.ERROR


def is_truthy(obj):
    """Only false and null are falsy. Everything else, including 0 and "", is truthy."""
    return obj is not NULL and obj is not FALSE

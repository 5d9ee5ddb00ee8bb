"""Prime field GF(p) with p = 3 * 2^30 + 1.

FieldElement is the scalar type used by every other module. Arithmetic is
exposed through named methods (add, sub, mul, div, neg, pow, inverse); the
Python operators are thin aliases that also accept plain ints.

The galois field type FF is kept alongside for vectorized evaluation over
large domains (see Polynomial.eval_domain) and as an independent oracle.
"""

from typing import Iterable, List, Union

import galois

from starkcore.errors import InverseUndefinedError, InvariantViolationError

# --- Field Construction ---

PRIME = 3 * 2**30 + 1
"""Field modulus. p - 1 = 3 * 2^30, so subgroups of every order 2^k, k <= 30, exist."""

TWO_ADICITY = 30

GENERATOR_VALUE = 5
"""Smallest primitive root of PRIME; generates the whole multiplicative group."""

FF = galois.GF(PRIME)
"""galois field type over the same modulus."""


# --- Field Element ---

class FieldElement:
    """Element of GF(PRIME), always stored in canonical form [0, PRIME)."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        object.__setattr__(self, "_value", int(value) % PRIME)

    @property
    def value(self) -> int:
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError(f"FieldElement is immutable; cannot set {name!r}")

    @classmethod
    def zero(cls) -> "FieldElement":
        return cls(0)

    @classmethod
    def one(cls) -> "FieldElement":
        return cls(1)

    @classmethod
    def generator(cls) -> "FieldElement":
        """Return the primitive root generating the full multiplicative group."""
        return cls(GENERATOR_VALUE)

    # --- Named Arithmetic ---

    def add(self, other: "FieldElement") -> "FieldElement":
        return FieldElement(self.value + other.value)

    def sub(self, other: "FieldElement") -> "FieldElement":
        return FieldElement(self.value - other.value)

    def mul(self, other: "FieldElement") -> "FieldElement":
        return FieldElement(self.value * other.value)

    def div(self, other: "FieldElement") -> "FieldElement":
        """Multiply by the inverse of other; dividing by zero raises InverseUndefinedError."""
        return self.mul(other.inverse())

    def neg(self) -> "FieldElement":
        return FieldElement(-self.value)

    def pow(self, exponent: int) -> "FieldElement":
        """Raise to a non-negative integer power by square-and-multiply.

        Costs O(log exponent) field multiplications.
        """
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        base = self
        result = FieldElement.one()
        while exponent:
            if exponent & 1:
                result = result.mul(base)
            base = base.mul(base)
            exponent >>= 1
        return result

    def inverse(self) -> "FieldElement":
        """Multiplicative inverse via the extended Euclidean algorithm on (p, value).

        Raises:
            InverseUndefinedError: If the element is zero
            InvariantViolationError: If the computed gcd is not 1
        """
        if self.value == 0:
            raise InverseUndefinedError("Cannot invert the zero field element")
        t, new_t = 0, 1
        r, new_r = PRIME, self.value
        while new_r != 0:
            q = r // new_r
            t, new_t = new_t, t - q * new_t
            r, new_r = new_r, r - q * new_r
        if r != 1:
            raise InvariantViolationError(f"gcd({PRIME}, {self.value}) is {r}, expected 1")
        return FieldElement(t)

    def equals(self, other: "FieldElement") -> bool:
        return self.value == other.value

    def is_zero(self) -> bool:
        return self.value == 0

    # --- Operator Aliases ---

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.sub(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.div(self)

    def __neg__(self) -> "FieldElement":
        return self.neg()

    def __pow__(self, exponent: int) -> "FieldElement":
        return self.pow(exponent)

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"FieldElement({self.value})"


FieldLike = Union[FieldElement, int]


def _coerce(value) -> Union[FieldElement, None]:
    """Promote ints to FieldElement; anything else yields None."""
    if isinstance(value, FieldElement):
        return value
    if isinstance(value, int):
        return FieldElement(value)
    return None


# --- Subgroups and Cosets ---

def generator_of_order(order: int) -> FieldElement:
    """Return a generator of the unique multiplicative subgroup of the given order.

    The order must be a power of two no larger than 2^TWO_ADICITY. The result
    is GENERATOR_VALUE^((p - 1) / order).
    """
    if order <= 0 or order & (order - 1) or order > 1 << TWO_ADICITY:
        raise ValueError(f"order must be a power of two in [1, 2^{TWO_ADICITY}], got {order}")
    return FieldElement.generator().pow((PRIME - 1) // order)


def subgroup(order: int) -> List[FieldElement]:
    """List the subgroup of the given order as consecutive generator powers g^0 .. g^(order-1)."""
    return coset(FieldElement.one(), order)


def coset(offset: FieldElement, order: int) -> List[FieldElement]:
    """List offset * g^i for the subgroup generator g of the given order."""
    g = generator_of_order(order)
    points = []
    current = offset
    for _ in range(order):
        points.append(current)
        current = current.mul(g)
    return points


# --- galois Interop ---

def to_ff(values: Iterable[FieldElement]) -> FF:
    """Convert FieldElements to an FF array."""
    return FF([v.value for v in values])


def from_ff(array: FF) -> List[FieldElement]:
    """Convert an FF array back to FieldElements."""
    return [FieldElement(int(v)) for v in array]

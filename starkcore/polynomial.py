"""Dense polynomials over GF(p).

Coefficients are stored lowest degree first and are always trimmed of
trailing zeros, so the zero polynomial is the empty coefficient list and
has degree -1. The variable name is cosmetic: it is carried through
arithmetic and used for printing, but never compared.

Named methods (add, sub, mul, scalar_mul, compose, divide_with_remainder,
exact_divide) are the arithmetic contract. Operators delegate to them.
"""

import logging
from typing import Iterator, List, Sequence, Tuple, Union

from starkcore.batch_inverse import batch_inverse
from starkcore.errors import (
    DivisionByZeroError,
    DuplicatePointsError,
    LengthMismatchError,
    NotExactlyDivisibleError,
)
from starkcore.field import FF, FieldElement, FieldLike, from_ff, to_ff

logger = logging.getLogger(__name__)


def _to_field(value: FieldLike) -> FieldElement:
    if isinstance(value, FieldElement):
        return value
    return FieldElement(value)


def _trim(coefficients: List[FieldElement]) -> List[FieldElement]:
    """Drop trailing zero coefficients in place and return the list."""
    while coefficients and coefficients[-1].is_zero():
        coefficients.pop()
    return coefficients


class Polynomial:
    """Polynomial over GF(p). coefficients[0] is the constant term."""

    def __init__(self, coefficients: Sequence[FieldLike], var: str = "x") -> None:
        self.coefficients: List[FieldElement] = _trim([_to_field(c) for c in coefficients])
        self.var = var

    # --- Constructors ---

    @classmethod
    def zero(cls, var: str = "x") -> "Polynomial":
        return cls([], var)

    @classmethod
    def constant(cls, value: FieldLike, var: str = "x") -> "Polynomial":
        return cls([value], var)

    @classmethod
    def x(cls, var: str = "x") -> "Polynomial":
        """The identity polynomial."""
        return cls([0, 1], var)

    @classmethod
    def monomial(cls, degree: int, coefficient: FieldLike, var: str = "x") -> "Polynomial":
        """Single term coefficient * var^degree."""
        if degree < 0:
            raise ValueError(f"degree must be non-negative, got {degree}")
        return cls([FieldElement.zero()] * degree + [_to_field(coefficient)], var)

    @classmethod
    def linear_term(cls, root: FieldLike, var: str = "x") -> "Polynomial":
        """The monic linear polynomial var - root."""
        return cls([_to_field(root).neg(), FieldElement.one()], var)

    # --- Inspection ---

    def degree(self) -> int:
        """Degree of the polynomial; the zero polynomial has degree -1."""
        return len(self.coefficients) - 1

    def is_zero(self) -> bool:
        return not self.coefficients

    def coefficient(self, n: int) -> FieldElement:
        """Coefficient of var^n, zero above the degree."""
        if n < len(self.coefficients):
            return self.coefficients[n]
        return FieldElement.zero()

    def leading_coefficient(self) -> FieldElement:
        if self.is_zero():
            return FieldElement.zero()
        return self.coefficients[-1]

    # --- Evaluation ---

    def eval(self, point: FieldLike) -> FieldElement:
        """Evaluate at a point with Horner's method."""
        point = _to_field(point)
        result = FieldElement.zero()
        for coef in reversed(self.coefficients):
            result = result.mul(point).add(coef)
        return result

    def eval_domain(self, points: Sequence[FieldElement]) -> List[FieldElement]:
        """Evaluate at every point of a domain.

        Runs Horner's method once over an FF array holding all points, so the
        Python-level loop is over coefficients rather than over points.
        """
        if not points:
            return []
        xs = to_ff(points)
        acc = FF.Zeros(len(points))
        for coef in reversed(self.coefficients):
            acc = acc * xs + FF(coef.value)
        return from_ff(acc)

    # --- Arithmetic ---

    def add(self, other: "Polynomial") -> "Polynomial":
        longer, shorter = self.coefficients, other.coefficients
        if len(shorter) > len(longer):
            longer, shorter = shorter, longer
        result = list(longer)
        for i, coef in enumerate(shorter):
            result[i] = result[i].add(coef)
        return Polynomial(result, self.var)

    def neg(self) -> "Polynomial":
        return Polynomial([c.neg() for c in self.coefficients], self.var)

    def sub(self, other: "Polynomial") -> "Polynomial":
        n = max(len(self.coefficients), len(other.coefficients))
        result = [self.coefficient(i).sub(other.coefficient(i)) for i in range(n)]
        return Polynomial(result, self.var)

    def mul(self, other: "Polynomial") -> "Polynomial":
        """Schoolbook product, O(n*m) field multiplications."""
        if self.is_zero() or other.is_zero():
            return Polynomial.zero(self.var)
        result = [FieldElement.zero()] * (len(self.coefficients) + len(other.coefficients) - 1)
        for i, a in enumerate(self.coefficients):
            if a.is_zero():
                continue
            for j, b in enumerate(other.coefficients):
                result[i + j] = result[i + j].add(a.mul(b))
        return Polynomial(result, self.var)

    def scalar_mul(self, scalar: FieldLike) -> "Polynomial":
        scalar = _to_field(scalar)
        return Polynomial([c.mul(scalar) for c in self.coefficients], self.var)

    def pow(self, exponent: int) -> "Polynomial":
        """Raise to a non-negative integer power by square-and-multiply."""
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        base = self
        result = Polynomial.constant(1, self.var)
        while exponent:
            if exponent & 1:
                result = result.mul(base)
            base = base.mul(base)
            exponent >>= 1
        return result

    def compose(self, other: "Polynomial") -> "Polynomial":
        """Return self(other(x)) by Horner substitution."""
        result = Polynomial.zero(self.var)
        for coef in reversed(self.coefficients):
            result = result.mul(other).add(Polynomial([coef], self.var))
        return result

    def divide_with_remainder(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        """Euclidean division returning (quotient, remainder).

        Each step cancels the leading term of the running remainder with
        c * x^(d1 - d2) * divisor, where c = lead(remainder) / lead(divisor),
        until deg(remainder) < deg(divisor). The result satisfies
        self == quotient * divisor + remainder.

        Raises:
            DivisionByZeroError: If divisor is the zero polynomial
        """
        if divisor.is_zero():
            raise DivisionByZeroError("Cannot divide by the zero polynomial")

        divisor_degree = divisor.degree()
        remainder = list(self.coefficients)
        quotient = [FieldElement.zero()] * max(len(remainder) - divisor_degree, 0)
        lead_inv = divisor.leading_coefficient().inverse()

        while len(remainder) - 1 >= divisor_degree:
            shift = len(remainder) - 1 - divisor_degree
            c = remainder[-1].mul(lead_inv)
            quotient[shift] = c
            for i, coef in enumerate(divisor.coefficients):
                remainder[i + shift] = remainder[i + shift].sub(c.mul(coef))
            _trim(remainder)

        return Polynomial(quotient, self.var), Polynomial(remainder, self.var)

    def exact_divide(self, divisor: "Polynomial") -> "Polynomial":
        """Quotient of a division known to leave no remainder.

        Raises:
            DivisionByZeroError: If divisor is the zero polynomial
            NotExactlyDivisibleError: If the remainder is not zero
        """
        quotient, remainder = self.divide_with_remainder(divisor)
        if not remainder.is_zero():
            raise NotExactlyDivisibleError(remainder)
        return quotient

    # --- Operator Aliases ---

    def __call__(self, point: FieldLike) -> FieldElement:
        return self.eval(point)

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.sub(self)

    def __neg__(self) -> "Polynomial":
        return self.neg()

    def __mul__(self, other):
        if isinstance(other, Polynomial):
            return self.mul(other)
        if isinstance(other, (FieldElement, int)):
            return self.scalar_mul(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Polynomial):
            return self.exact_divide(other)
        if isinstance(other, (FieldElement, int)):
            return self.scalar_mul(_to_field(other).inverse())
        return NotImplemented

    def __mod__(self, other: "Polynomial") -> "Polynomial":
        return self.divide_with_remainder(other)[1]

    def __divmod__(self, other: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        return self.divide_with_remainder(other)

    def __pow__(self, exponent: int) -> "Polynomial":
        return self.pow(exponent)

    def __eq__(self, other) -> bool:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.coefficients == other.coefficients

    __hash__ = None

    def _coerce(self, other) -> Union["Polynomial", None]:
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, (FieldElement, int)):
            return Polynomial.constant(other, self.var)
        return None

    # --- Display ---

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        terms = []
        for degree in range(self.degree(), -1, -1):
            coef = self.coefficients[degree]
            if coef.is_zero():
                continue
            if degree == 0:
                terms.append(str(coef))
                continue
            power = self.var if degree == 1 else f"{self.var}^{degree}"
            terms.append(power if coef == 1 else f"{coef}{power}")
        return " + ".join(terms)

    def __repr__(self) -> str:
        return f"Polynomial({[c.value for c in self.coefficients]}, var={self.var!r})"


# --- Products ---

Factor = Union[Polynomial, FieldElement]


def prod(values: Sequence[Factor]) -> Factor:
    """Multiply polynomials (or field elements) by balanced recursive halving.

    Splitting the sequence in half keeps the operands of each pairwise
    multiplication at similar degrees. The empty product is the constant
    polynomial 1.
    """
    n = len(values)
    if n == 0:
        return Polynomial.constant(1)
    if n == 1:
        return values[0]
    half = n // 2
    return prod(values[:half]).mul(prod(values[half:]))


# --- Lagrange Interpolation ---

def _check_distinct(x_values: Sequence[FieldElement]) -> None:
    seen = set()
    for x in x_values:
        if x in seen:
            raise DuplicatePointsError(x)
        seen.add(x)


def _basis_polynomials(x_values: List[FieldElement], var: str) -> Iterator[Polynomial]:
    """Yield L_j = N(x) / ((x - x_j) * D_j) for every point, in order."""
    linear_terms = [Polynomial.linear_term(x, var) for x in x_values]
    numerator = prod(linear_terms)

    denominators = []
    for j, x_j in enumerate(x_values):
        differences = [x_j.sub(x_i) for i, x_i in enumerate(x_values) if i != j]
        denominators.append(prod(differences) if differences else FieldElement.one())
    inverses = batch_inverse(denominators)

    for term, inv in zip(linear_terms, inverses):
        yield numerator.exact_divide(term).scalar_mul(inv)


def lagrange_basis(x_values: Sequence[FieldLike], var: str = "x") -> List[Polynomial]:
    """Lagrange basis polynomials for distinct points.

    L_j equals 1 at x_values[j] and 0 at every other point.

    Raises:
        DuplicatePointsError: If a point repeats
    """
    x_values = [_to_field(x) for x in x_values]
    _check_distinct(x_values)
    return list(_basis_polynomials(x_values, var))


def interpolate_poly(
    x_values: Sequence[FieldLike],
    y_values: Sequence[FieldLike],
    var: str = "x",
) -> Polynomial:
    """Unique polynomial of degree < n through the points (x_values[i], y_values[i]).

    Raises:
        LengthMismatchError: If the two sequences differ in length
        DuplicatePointsError: If a point repeats
    """
    if len(x_values) != len(y_values):
        raise LengthMismatchError(len(x_values), len(y_values))
    x_values = [_to_field(x) for x in x_values]
    y_values = [_to_field(y) for y in y_values]
    _check_distinct(x_values)
    logger.debug(f"interpolating through {len(x_values)} points")

    result = Polynomial.zero(var)
    for y, basis in zip(y_values, _basis_polynomials(x_values, var)):
        if not y.is_zero():
            result = result.add(basis.scalar_mul(y))
    return result

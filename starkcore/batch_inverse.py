"""Montgomery batch inversion over GF(p).

Converts N field inversions into 3N-3 multiplications + 1 inversion.
"""

from typing import List, Sequence

from starkcore.field import FieldElement


def batch_inverse(values: Sequence[FieldElement]) -> List[FieldElement]:
    """Invert every element of values with a single field inversion.

    Algorithm:
    1. Forward pass: prefix products cumprods[i] = a[0] * a[1] * ... * a[i]
    2. Single inversion: inv_total = cumprods[N-1]^(-1)
    3. Backward pass: peel individual inverses off using cumprods

    Args:
        values: FieldElements to invert (must all be non-zero)

    Returns:
        List where result[i] = values[i]^(-1)

    Raises:
        InverseUndefinedError: If any element is zero
    """
    n = len(values)
    if n == 0:
        return []
    if n == 1:
        return [values[0].inverse()]

    cumprods = [values[0]]
    for i in range(1, n):
        cumprods.append(cumprods[i - 1].mul(values[i]))

    z = cumprods[n - 1].inverse()

    results = [FieldElement.zero()] * n
    for i in range(n - 1, 0, -1):
        results[i] = z.mul(cumprods[i - 1])
        z = z.mul(values[i])
    results[0] = z

    return results

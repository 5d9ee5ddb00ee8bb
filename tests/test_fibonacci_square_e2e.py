"""
End-to-end commit/challenge flow over the Fibonacci-square trace.

    a[0] = 1, a[1] = 3141592, a[i+2] = a[i+1]^2 + a[i]^2, a[1022] = 2338775057

Run: python -m pytest tests/test_fibonacci_square_e2e.py -v

What these tests cover:
    - Trace interpolation over the order-1024 subgroup G
    - Low-degree extension onto an order-8192 coset of the field generator
    - Merkle commitment of the extension and absorption into the channel
    - Constraint quotients built with exact division and composition
    - A random linear combination of the quotients drawn from the channel
"""

from typing import List

import pytest

from starkcore.channel import Channel
from starkcore.field import FieldElement, coset, generator_of_order, subgroup
from starkcore.hashing import serialize, sha256_hex
from starkcore.merkle_tree import MerkleTree, verify_decommitment
from starkcore.polynomial import Polynomial, interpolate_poly, prod

X = Polynomial.x()


def test_trace_final_value(fibsq_trace: List[FieldElement]) -> None:
    assert len(fibsq_trace) == 1023
    assert fibsq_trace[0] == FieldElement(1)
    assert fibsq_trace[1022] == FieldElement(2338775057)


@pytest.fixture(scope="module")
def trace_domain() -> List[FieldElement]:
    return subgroup(1024)


@pytest.fixture(scope="module")
def eval_domain() -> List[FieldElement]:
    return coset(FieldElement.generator(), 8192)


@pytest.fixture(scope="module")
def trace_poly(fibsq_trace: List[FieldElement], trace_domain: List[FieldElement]) -> Polynomial:
    return interpolate_poly(trace_domain[:-1], fibsq_trace)


@pytest.mark.slow
class TestFibonacciSquare:
    """Commit to the trace, then to the composition polynomial."""

    def test_domains(self, trace_domain: List[FieldElement], eval_domain: List[FieldElement]) -> None:
        g = generator_of_order(1024)
        assert trace_domain[1] == g
        assert trace_domain[1023] * g == FieldElement.one()
        assert eval_domain[0] == FieldElement.generator()
        assert len(set(eval_domain)) == 8192
        assert set(eval_domain).isdisjoint(trace_domain)

    def test_trace_polynomial(
        self,
        trace_poly: Polynomial,
        fibsq_trace: List[FieldElement],
        trace_domain: List[FieldElement],
    ) -> None:
        assert trace_poly.degree() <= 1022
        assert trace_poly(2) == FieldElement(1302089273)
        for i in (0, 1, 500, 1022):
            assert trace_poly(trace_domain[i]) == fibsq_trace[i]

    def test_boundary_constraints(self, trace_poly: Polynomial, trace_domain: List[FieldElement]) -> None:
        p0 = (trace_poly - 1).exact_divide(X - 1)
        assert p0(2718) == FieldElement(2509888982)

        p1 = (trace_poly - 2338775057).exact_divide(Polynomial.linear_term(trace_domain[1022]))
        assert p1(5772) == FieldElement(232961446)

    def test_commit_and_compose(
        self,
        trace_poly: Polynomial,
        trace_domain: List[FieldElement],
        eval_domain: List[FieldElement],
    ) -> None:
        g = trace_domain[1]

        # Low-degree extension and its commitment
        f_eval = trace_poly.eval_domain(eval_domain)
        for i in (0, 1, 4095, 8191):
            assert f_eval[i] == trace_poly(eval_domain[i])
        assert sha256_hex(serialize(f_eval)) == "1d357f674c27194715d1440f6a166e30855550cb8cb8efeb72827f6a1bf9b5bb"
        f_merkle = MerkleTree(f_eval)
        f_root = f_merkle.build()
        assert f_root == "59e7ca76ed81c58aa10eacb4614e9e5ac598013d4562b71131bf5ef4e1cf42c6"
        path = f_merkle.get_authentication_path(1234)
        assert verify_decommitment(1234, f_eval[1234], path, f_root)

        channel = Channel()
        channel.send(f_root)

        # Constraint quotients
        p0 = (trace_poly - 1).exact_divide(X - 1)
        p1 = (trace_poly - 2338775057).exact_divide(Polynomial.linear_term(trace_domain[1022]))

        numerator = (
            trace_poly.compose(Polynomial([0, g * g]))
            - trace_poly.compose(Polynomial([0, g])).pow(2)
            - trace_poly.pow(2)
        )
        tail_roots = prod([Polynomial.linear_term(trace_domain[i]) for i in (1021, 1022, 1023)])
        denominator = (X ** 1024 - 1).exact_divide(tail_roots)
        p2 = numerator.exact_divide(denominator)
        assert p2.degree() == 1023
        assert p2(31415) == FieldElement(2090051528)

        # Random linear combination of the quotients
        alphas = [channel.draw_field_element() for _ in range(3)]
        cp = p0.scalar_mul(alphas[0]).add(p1.scalar_mul(alphas[1])).add(p2.scalar_mul(alphas[2]))
        assert cp.degree() <= 1023

        cp_eval = cp.eval_domain(eval_domain)
        cp_root = MerkleTree(cp_eval).build()
        channel.send(cp_root)

        expected_transcript = f_root + "".join(str(a) for a in alphas) + cp_root
        assert channel.transcript == expected_transcript
        assert len(sha256_hex(channel.transcript)) == 64

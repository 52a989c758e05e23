"""
Tests
"""

import pytest
import random
from toyvss.curve_op import get_curve
from toyvss.errors import DegreeUnderflowError
from toyvss.polynomial import Polynomial, BlindingPolynomial, evaluate_commitments


curve = get_curve("secp256k1")
field = curve.field
g = curve.generator
h = curve.pedersen_h


def test_polynomial():
    for _ in range(5):
        degree = random.randint(0, 10)
        secret = field.random()
        print(f"\ndegree={degree}")
        poly = Polynomial.new(secret, degree, field=field)
        assert poly.coefficients[0] == secret
        assert len(poly) == degree + 1
        assert poly.degree == degree
        assert poly.evaluate(0) == secret


def test_constant_polynomial():
    poly = Polynomial.new(42, 0, field=field)
    for _ in range(5):
        assert poly.evaluate(field.random()) == 42


def test_negative_degree():
    with pytest.raises(DegreeUnderflowError):
        Polynomial.new(7, -1, field=field)


def test_evaluate():
    # y = 3x^2 + 2x + 1
    poly = Polynomial([1, 2, 3], field)
    assert poly.evaluate(0) == 1
    assert poly.evaluate(1) == 6
    assert poly.evaluate(2) == 17
    assert poly.evaluate(field.order - 1) == 2  # x = -1

    poly = Polynomial.new(field.random(), 7, field=field)
    for _ in range(5):
        x = field.random()
        naive = sum(c * pow(x, i, field.order) for i, c in enumerate(poly.coefficients)) % field.order
        assert poly.evaluate(x) == naive


def test_seeded_rng():
    assert Polynomial.new(5, 4, random.Random(1), field) == Polynomial.new(5, 4, random.Random(1), field)
    assert Polynomial.new(5, 4, random.Random(1), field) != Polynomial.new(5, 4, random.Random(2), field)


def test_repr_hides_coefficients():
    secret = 123456789
    poly = Polynomial.new(secret, 2, field=field)
    assert str(secret) not in repr(poly)
    assert "degree=2" in repr(poly)


def test_feldman_commitment():
    poly = Polynomial.new(7, 2, field=field)
    commitments = poly.feldman_commit(g)
    assert len(commitments) == len(poly.coefficients)
    for i, C in enumerate(commitments):
        assert C == curve.mul(g, poly.coefficients[i]), f"Commitment failed at index {i}!"


def test_pedersen_commitment():
    poly = Polynomial.new(7, 2, field=field)
    commitments, blinding_poly = poly.pedersen_commit(g, h)
    assert isinstance(blinding_poly, BlindingPolynomial)
    assert len(commitments) == len(poly.coefficients)
    assert len(blinding_poly) == len(poly)
    for i, C in enumerate(commitments):
        expected = curve.add(curve.mul(g, poly.coefficients[i]), curve.mul(h, blinding_poly.coefficients[i]))
        assert C == expected

    # fresh blinding on every call
    commitments_2, blinding_poly_2 = poly.pedersen_commit(g, h)
    assert commitments != commitments_2
    assert blinding_poly != blinding_poly_2


def test_feldman_commitment_with_random_degree():
    for degree in range(1, 11):
        poly = Polynomial.new(random.randint(1, 99), degree, field=field)
        commitments = poly.feldman_commit(g)
        for _ in range(20):
            x = field.random()
            expected = curve.mul(g, poly.evaluate(x))
            actual = evaluate_commitments(commitments, x, curve)
            assert expected == actual, f"Commitment failed at random x with degree {degree}!"


def test_pedersen_commitment_with_random_degree():
    for degree in range(1, 11):
        poly = Polynomial.new(random.randint(1, 99), degree, field=field)
        commitments, blinding_poly = poly.pedersen_commit(g, h)
        for _ in range(20):
            x = field.random()
            expected = curve.add(curve.mul(g, poly.evaluate(x)), curve.mul(h, blinding_poly.evaluate(x)))
            actual = evaluate_commitments(commitments, x, curve)
            assert expected == actual, f"Commitment failed at random x with degree {degree}!"


@pytest.mark.parametrize("name", ["nist256p", "sm2"])
def test_commitments_on_other_curves(name):
    other = get_curve(name)
    poly = Polynomial.new(other.field.random(), 3, field=other.field)
    commitments, blinding_poly = poly.pedersen_commit(other.generator, other.pedersen_h)
    x = other.field.random()
    expected = other.add(other.mul(other.generator, poly.evaluate(x)),
                         other.mul(other.pedersen_h, blinding_poly.evaluate(x)))
    assert evaluate_commitments(commitments, x, other) == expected
    assert evaluate_commitments(poly.feldman_commit(other.generator), x, name) == other.mul(other.generator, poly.evaluate(x))


def test_zero_coefficient_commitment():
    # the identity shows up as a commitment when a coefficient is 0
    poly = Polynomial([0, 5], field)
    commitments = poly.feldman_commit(g)
    assert commitments[0] == curve.identity
    assert evaluate_commitments(commitments, 3, curve) == curve.mul(g, 15)
    commitments, blinding_poly = poly.pedersen_commit(g, h)
    assert evaluate_commitments(commitments, 3, curve) == curve.add(curve.mul(g, 15), curve.mul(h, blinding_poly.evaluate(3)))


def test_empty_polynomial():
    with pytest.raises(DegreeUnderflowError):
        Polynomial([], field)
    with pytest.raises(DegreeUnderflowError):
        Polynomial(iter([]), field)

"""
Polynomials over the scalar field of a curve, plus Feldman and Pedersen
commitments to their coefficients.

Feldman: https://www.cs.umd.edu/~gasarch/TOPICS/secretsharing/feldmanVSS.pdf
Pedersen: https://link.springer.com/content/pdf/10.1007/3-540-46766-1_9.pdf
"""

from typing import List, Tuple

from .curve_op import get_curve
from .errors import DegreeUnderflowError


class Polynomial:
    def __init__(self, coefficients, field=None):
        if field is None:
            field = get_curve().field
        self.field = field
        # coef[0] is the constant term, coef[i] goes with x^i
        self._coef = tuple(field.from_int(c) for c in coefficients)
        if not self._coef:
            raise DegreeUnderflowError("Polynomial needs at least a constant term")

    @classmethod
    def new(cls, secret, degree, rng=None, field=None):
        """
        Random polynomial of the given degree with secret as the constant term.
        """
        if degree < 0:
            raise DegreeUnderflowError(f"Polynomial degree must be >= 0, got {degree}")
        if field is None:
            field = get_curve().field
        return cls([secret] + [field.random(rng) for _ in range(degree)], field)

    @property
    def coefficients(self) -> Tuple[int, ...]:
        return self._coef

    @property
    def degree(self):
        return len(self._coef) - 1

    def __len__(self):
        return len(self._coef)

    def __eq__(self, other):
        return isinstance(other, Polynomial) and self.field == other.field and self._coef == other._coef

    def __hash__(self):
        return hash((self.field, self._coef))

    def __repr__(self):
        # coefficients are secret material
        return f"Polynomial(degree={self.degree})"

    def evaluate(self, x):
        # For example let the polynomial be y = ax^2 + bx + c
        # self._coef = (c, b, a)
        # step 0(initialize):
        #   y = 0
        # step 1..3(multiply with x and add next coef, highest first):
        #   y = ((0*x + a)*x + b)*x + c
        field = self.field
        acc = field.zero
        for c in reversed(self._coef):
            acc = field.add(field.mul(acc, x), c)
        return acc

    def feldman_commit(self, g) -> List:
        """
        g*c_i for every coefficient. Binding but not hiding,
        C_0 is the public key of the secret.
        """
        return [g * c for c in self._coef]

    def pedersen_commit(self, g, h, rng=None):
        """
        g*c_i + h*r_i with a fresh r_i per coefficient.
        Returns the commitments and the blinding polynomial made of the r_i.
        Calling it twice on the same polynomial gives unrelated commitments.
        """
        blinding = [self.field.random(rng) for _ in self._coef]
        commitments = [g * c + h * r for c, r in zip(self._coef, blinding)]
        return commitments, BlindingPolynomial(blinding, self.field)


BlindingPolynomial = Polynomial


def evaluate_commitments(commitments, x, curve=None):
    """
    C_0 + C_1*x + C_2*x^2 + ...

    For Feldman commitments this equals g*p(x), for Pedersen g*p(x) + h*b(x).
    """
    group = get_curve(curve)
    field = group.field
    x = field.from_int(x)
    result = group.identity
    for i, C in enumerate(commitments):
        result = group.add(result, group.mul(C, field.pow(x, i)))
    return result

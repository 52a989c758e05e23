"""
Shamir secret sharing over the scalar field of an elliptic curve group,
with Feldman and Pedersen verifiable secret sharing.

The threshold scheme is based on values t,n
t = minimum number of shares needed to reconstruct the secret.
n = total number of shares handed out.

Protocol:
1. The dealer picks a random polynomial of degree t-1 whose constant term is the secret
   and hands out the points x = 1..n on it.
2. For VSS the dealer also publishes commitments to the coefficients, so every party
   can check its own point is on the committed polynomial.
3. Any t parties interpolate at x = 0 to get the secret back.
"""

import logging
from collections import namedtuple
from typing import List

from .curve_op import get_curve, compressed_hex
from .errors import (
    DegreeUnderflowError,
    InsufficientSharesError,
    SingularInterpolationError,
    ThresholdError,
)
from .polynomial import Polynomial, evaluate_commitments

_logger = logging.getLogger(__name__)


Share = namedtuple("Share", "x y")

FeldmanDealing = namedtuple("FeldmanDealing", "shares commitments")

PedersenDealing = namedtuple("PedersenDealing", "shares commitments blinding_poly")


class ThresholdShares(namedtuple("ThresholdShares", "threshold shares")):
    """
    Shares together with the threshold they were dealt with, so that
    reconstructing from too few of them is an error instead of a wrong secret.
    """

    def reconstruct(self, curve=None):
        return reconstruct_secret(self.shares, threshold=self.threshold, curve=curve)


def _check_threshold(n, t, group):
    if t < 1:
        raise DegreeUnderflowError(f"Threshold must be at least 1, got {t}")
    if n < t:
        raise ThresholdError(f"Cannot deal {n} shares with threshold {t}")
    if n >= group.order:
        raise ThresholdError(f"{n} shares do not fit in the {group.name} scalar field")


def _evaluate_shares(poly: Polynomial, n) -> List[Share]:
    # x coordinate of party i is i, 0 is where the secret sits
    return [Share(x, poly.evaluate(x)) for x in range(1, n + 1)]


def generate_shares(secret, n, t, rng=None, curve=None) -> List[Share]:
    group = get_curve(curve)
    _check_threshold(n, t, group)
    poly = Polynomial.new(secret, t - 1, rng, group.field)
    _logger.debug("Dealt %s shares with threshold %s on %s", n, t, group.name)
    return _evaluate_shares(poly, n)


def generate_shares_with_feldman_vss(secret, n, t, g=None, rng=None, curve=None) -> FeldmanDealing:
    """
    Shares plus the Feldman commitments g*c_i to the coefficients of the sharing polynomial.
    Anyone holding the commitments can check any share with verify_share_with_feldman_vss.
    """
    group = get_curve(curve)
    _check_threshold(n, t, group)
    if g is None:
        g = group.generator
    poly = Polynomial.new(secret, t - 1, rng, group.field)
    commitments = poly.feldman_commit(g)
    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("Dealt %s Feldman shares with threshold %s on %s, C_0=%s",
                      n, t, group.name, compressed_hex(commitments[0]))
    return FeldmanDealing(_evaluate_shares(poly, n), commitments)


def generate_shares_with_pedersen_vss(secret, n, t, g=None, h=None, rng=None, curve=None) -> PedersenDealing:
    """
    Shares plus the Pedersen commitments g*c_i + h*r_i and the blinding polynomial
    made of the r_i.

    The dealer keeps the blinding polynomial. Handing it out whole lets every verifier
    check every share; to give each party only what it needs use blinding_shares.

    h must be a generator whose discrete log base g nobody knows, the default is
    derived by hashing (see CurveGroup.pedersen_h).
    """
    group = get_curve(curve)
    _check_threshold(n, t, group)
    if g is None:
        g = group.generator
    if h is None:
        h = group.pedersen_h
    poly = Polynomial.new(secret, t - 1, rng, group.field)
    commitments, blinding_poly = poly.pedersen_commit(g, h, rng)
    _logger.debug("Dealt %s Pedersen shares with threshold %s on %s", n, t, group.name)
    return PedersenDealing(_evaluate_shares(poly, n), commitments, blinding_poly)


def blinding_shares(blinding_poly: Polynomial, shares) -> List[Share]:
    """
    Per party blinding values b(x_i), one for every share.
    Party i gets shares[i] and blinding_shares(...)[i] and nothing else.
    """
    return [Share(x, blinding_poly.evaluate(x)) for x, _ in shares]


def reconstruct_secret(shares, threshold=None, curve=None):
    """
    Lagrange interpolation at x = 0.

    Each coefficient is lambda_i = prod_{j != i} x_j / (x_j - x_i)
    and the secret is sum_i y_i * lambda_i.

    Arguments:
    shares: points on the polynomial, x coordinates distinct and nonzero.
    threshold: when given, fewer shares than this is an InsufficientSharesError.
    curve: the curve the shares were dealt on.

    Without threshold nothing here can tell that too few shares were passed,
    the result is then simply not the secret. Callers that need the check should
    pass threshold or use ThresholdShares.
    """
    shares = list(shares)
    if not shares:
        raise InsufficientSharesError(threshold or 1, 0)
    if threshold is not None and len(shares) < threshold:
        raise InsufficientSharesError(threshold, len(shares))

    field = get_curve(curve).field
    xs = [field.from_int(x) for x, _ in shares]
    if field.zero in xs:
        raise SingularInterpolationError("Share with x = 0 cannot be interpolated at 0")

    secret = field.zero
    for i, (x_i, (_, y_i)) in enumerate(zip(xs, shares)):
        num = field.one
        denom = field.one
        for j, x_j in enumerate(xs):
            if i != j:
                num = field.mul(num, x_j)
                denom = field.mul(denom, field.sub(x_j, x_i))
        try:
            denom_inv = field.inv(denom)
        except ZeroDivisionError as exc:
            raise SingularInterpolationError(f"Duplicate share x coordinate {x_i}") from exc
        lam_i = field.mul(num, denom_inv)
        secret = field.add(secret, field.mul(field.from_int(y_i), lam_i))
    return secret


def verify_share_with_feldman_vss(share, commitments, g=None, curve=None) -> bool:
    """
    Check g*y == C_0 + C_1*x + C_2*x^2 + ...
    """
    if not commitments:
        return False
    group = get_curve(curve)
    if g is None:
        g = group.generator
    x, y = share
    ok = group.mul(g, y) == evaluate_commitments(commitments, x, group)
    if not ok:
        _logger.debug("Share x=%s failed the Feldman check", x)
    return ok


def verify_share_with_pedersen_vss(share, commitments, blinding, g=None, h=None, curve=None) -> bool:
    """
    Check g*y + h*b(x) == C_0 + C_1*x + C_2*x^2 + ...

    blinding is either the whole blinding polynomial, or just this party's
    blinding value b(x) (an int, or a Share from blinding_shares).
    Any other sequence is read as the coefficients of the blinding polynomial.
    """
    if not commitments:
        return False
    group = get_curve(curve)
    if g is None:
        g = group.generator
    if h is None:
        h = group.pedersen_h
    x, y = share
    if isinstance(blinding, Polynomial):
        b_x = blinding.evaluate(group.field.from_int(x))
    elif isinstance(blinding, Share):
        if group.field.from_int(blinding.x) != group.field.from_int(x):
            _logger.debug("Blinding value for x=%s handed to share x=%s", blinding.x, x)
            return False
        b_x = blinding.y
    elif isinstance(blinding, int):
        b_x = blinding
    else:
        blinding = list(blinding)
        if not blinding:
            return False
        b_x = Polynomial(blinding, group.field).evaluate(group.field.from_int(x))
    lhs = group.add(group.mul(g, y), group.mul(h, b_x))
    ok = lhs == evaluate_commitments(commitments, x, group)
    if not ok:
        _logger.debug("Share x=%s failed the Pedersen check", x)
    return ok

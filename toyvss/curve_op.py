"""
Curve provider for the secret sharing code.
Utilities for:
    1. Scalar arithmetic mod the group order (the field shares live in)
    2. EC point addition and scalar multiplication
    3. A second generator h with unknown discrete log, for Pedersen commitments
    4. A registry of the supported curves

    Point arithmetic is delegated to python-ecdsa:
    https://github.com/tlsfuzzer/python-ecdsa

    SM2 domain parameters are taken from GB/T 32918.5-2017.

    h is derived with try-and-increment:
    https://en.wikipedia.org/wiki/Elliptic_curve#Elliptic_curves_over_finite_fields

"""

import hashlib
import os
import secrets

from ecdsa import SECP256k1, NIST256p
from ecdsa.ellipticcurve import CurveFp, PointJacobi, INFINITY
from ecdsa.numbertheory import jacobi, square_root_mod_prime


# curve used when the caller does not pass one
DEFAULT_CURVE = os.environ.get("TOYVSS_CURVE", "secp256k1")

# tag for deriving the Pedersen generator h
H_SEED = b"toyvss/pedersen/h"

# SM2 domain params
sm2_p = 0xFFFFFFFEFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF00000000FFFFFFFFFFFFFFFF
sm2_a = 0xFFFFFFFEFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF00000000FFFFFFFFFFFFFFFC
sm2_b = 0x28E9FA9E9D9F5E344D5A9E4BCF6509A7F39789F515AB8F92DDBCBD414D940E93
sm2_gx = 0x32C4AE2C1F1981195F9904466A39C9948FE30BBFF2660BE1715A4589334C74C7
sm2_gy = 0xBC3736A2F4F6779C59BDCEE36B692153D0A9877CC62A474002DF32E52139F0A0
sm2_order = 0xFFFFFFFEFFFFFFFFFFFFFFFFFFFFFFFF7203DF6B21C6052B53BBF40939D54123
#############################

_system_rng = secrets.SystemRandom()


class ScalarField:
    """
    Integers mod a prime order. Scalars are plain python ints in [0, order).
    """

    zero = 0
    one = 1

    def __init__(self, order):
        self.order = order

    def from_int(self, value):
        return value % self.order

    def add(self, a, b):
        return (a + b) % self.order

    def sub(self, a, b):
        return (a - b) % self.order

    def mul(self, a, b):
        return a * b % self.order

    def neg(self, a):
        return -a % self.order

    def pow(self, a, e):
        return pow(a, e, self.order)

    def inv(self, x):
        """
        Compute an inverse for x modulo order, assuming that x
        is not divisible by order.

        pow with a negative exponent gives the modular inverse when the modulus is prime.
        https://docs.python.org/3/library/functions.html#pow
        """
        if x % self.order == 0:
            raise ZeroDivisionError("Impossible inverse")
        return pow(x, -1, self.order)

    def random(self, rng=None):
        """
        Uniform sample from the field. rng is anything with randrange,
        it has to be a CSPRNG outside of tests.
        """
        if rng is None:
            rng = _system_rng
        return rng.randrange(self.order)

    def __eq__(self, other):
        return isinstance(other, ScalarField) and self.order == other.order

    def __hash__(self):
        return hash(self.order)

    def __repr__(self):
        return f"ScalarField({self.order:#x})"


class CurveGroup:
    """
    Prime order group of points on a short weierstrass curve y^2 = x^3 + ax + b
    together with its scalar field.
    """

    identity = INFINITY

    def __init__(self, name, curve, generator, order):
        self.name = name
        self.curve = curve
        self.generator = generator
        self.order = order
        self.field = ScalarField(order)
        self._h = None

    def add(self, P, Q):
        if P == INFINITY:
            return Q
        if Q == INFINITY:
            return P
        return P + Q

    def mul(self, P, scalar):
        scalar %= self.order
        if scalar == 0 or P == INFINITY:
            return INFINITY
        return P * scalar

    def valid(self, P):
        if P == INFINITY:
            return True
        return self.curve.contains_point(P.x(), P.y())

    def random_point(self, rng=None):
        """Point with a known discrete log. Fine for tests, not for h."""
        return self.mul(self.generator, self.field.random(rng))

    def hash_to_point(self, seed: bytes) -> PointJacobi:
        """
        Map seed to a curve point nobody knows the discrete log of.
        Keeps hashing seed || counter until x^3 + ax + b is a square mod p,
        then picks the even root. All supported curves have cofactor 1
        so the point is in the prime order group.
        """
        p = self.curve.p()
        counter = 0
        while True:
            digest = hashlib.sha256(seed + counter.to_bytes(4, byteorder="big")).digest()
            x = int.from_bytes(digest, byteorder="big") % p
            rhs = (pow(x, 3, p) + self.curve.a() * x + self.curve.b()) % p
            if rhs and jacobi(rhs, p) == 1:
                y = square_root_mod_prime(rhs, p)
                if y & 1:
                    y = p - y
                point = PointJacobi(self.curve, x, y, 1, self.order)
                assert self.valid(point)
                return point
            counter += 1

    @property
    def pedersen_h(self):
        if self._h is None:
            self._h = self.hash_to_point(H_SEED + self.name.encode())
        return self._h

    def __repr__(self):
        return f"CurveGroup({self.name})"


def _sm2():
    curve = CurveFp(sm2_p, sm2_a, sm2_b, 1)
    generator = PointJacobi(curve, sm2_gx, sm2_gy, 1, sm2_order, generator=True)
    return CurveGroup("sm2", curve, generator, sm2_order)


CURVES = {
    "secp256k1": CurveGroup("secp256k1", SECP256k1.curve, SECP256k1.generator, SECP256k1.order),
    "nist256p": CurveGroup("nist256p", NIST256p.curve, NIST256p.generator, NIST256p.order),
    "sm2": _sm2(),
}


def get_curve(curve=None) -> CurveGroup:
    """
    Resolve a curve argument. Accepts None (the default curve), a registered
    name or anything that already looks like a CurveGroup.
    """
    if curve is None:
        curve = DEFAULT_CURVE
    if not isinstance(curve, str):
        return curve
    try:
        return CURVES[curve]
    except KeyError:
        raise ValueError(f"Unknown curve {curve!r}, expected one of {sorted(CURVES)}") from None


def compressed_hex(point) -> str:
    if point == INFINITY:
        return "00"
    if point.y() % 2 == 0:
        return f"02{point.x():0>64X}"
    else:
        return f"03{point.x():0>64X}"

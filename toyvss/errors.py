"""
Errors raised by the sharing code.

A share failing verification is not an error, the verify functions return False.
"""


class SecretSharingError(ValueError):
    pass


class DegreeUnderflowError(SecretSharingError):
    """Threshold of 0 (or a negative degree) asked for."""


class ThresholdError(SecretSharingError):
    """n and t don't describe a usable scheme, e.g. n < t."""


class SingularInterpolationError(SecretSharingError):
    """
    A lagrange denominator vanished: two shares have the same x,
    or one of them sits at x = 0.
    """


class InsufficientSharesError(SecretSharingError):
    def __init__(self, needed, got):
        super().__init__(f"Need at least {needed} shares, got {got}")
        self.needed = needed
        self.got = got

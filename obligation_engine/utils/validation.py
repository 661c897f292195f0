"""Numeric input checks shared by the domain validators"""

import math


def non_negative(value: float) -> bool:
    """True for finite values >= 0; NaN and infinities fail"""
    return math.isfinite(value) and value >= 0

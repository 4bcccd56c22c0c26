# ScientificEngine
"""""
Checked numeric operations for the calculator.

Every function returns a NumericResult instead of raising: either a usable
value, or an ErrorKind with value 0.0. Nothing in here reads calculator state;
angle-aware functions take the degree flag as an explicit argument.
"""""
import math
from typing import NamedTuple

from .error import ErrorKind


PI = math.pi
E = math.e
PHI = 1.6180339887498948482
SQRT2 = math.sqrt(2.0)
LN2 = math.log(2.0)
LN10 = math.log(10.0)

# |value| below this counts as an exact zero for poles of tan/sec/csc/cot
POLE_TOLERANCE = 1e-15

FACTORIAL_LIMIT = 170  # 171! does not fit into a double


class NumericResult:
    """Value-or-error pair returned by every library call."""
    def __init__(self, value=0.0, error_kind=None):
        self.value = 0.0 if error_kind is not None else float(value)
        self.error_kind = error_kind

    @property
    def has_error(self):
        return self.error_kind is not None

    def __eq__(self, other):
        if not isinstance(other, NumericResult):
            return NotImplemented
        return self.value == other.value and self.error_kind == other.error_kind

    def __repr__(self):
        if self.has_error:
            return f"NumericResult(error={self.error_kind.name})"
        return f"NumericResult({self.value!r})"


class ComplexValue(NamedTuple):
    real: float
    imag: float


def make_result(value, error_kind=None):
    return NumericResult(value, error_kind)


def failure(error_kind):
    return NumericResult(0.0, error_kind)


def checked(value):
    """Wrap a computed value, turning inf/NaN into an OVERFLOW result."""
    if not is_finite(value):
        return failure(ErrorKind.OVERFLOW)
    return make_result(value)


# -----------------------------
# Utilities
# -----------------------------

def is_finite(x):
    return math.isfinite(x)


def is_integer(x):
    """True for finite values without a fractional part."""
    return math.isfinite(x) and x == math.floor(x)


def deg_to_rad(degrees):
    return degrees * math.pi / 180.0


def rad_to_deg(radians):
    return radians * 180.0 / math.pi


def _to_radians(x, degrees):
    return deg_to_rad(x) if degrees else x


def _from_radians(x, degrees):
    return rad_to_deg(x) if degrees else x


# -----------------------------
# Core arithmetic
# -----------------------------

def add(a, b):
    return checked(a + b)


def subtract(a, b):
    return checked(a - b)


def multiply(a, b):
    return checked(a * b)


def divide(a, b):
    if b == 0.0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    return checked(a / b)


def mod(a, b):
    """Remainder with the sign of the dividend (C fmod semantics)."""
    if b == 0.0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    if not is_finite(a):
        return failure(ErrorKind.OVERFLOW)
    return make_result(math.fmod(a, b))


def power(base, exponent):
    if base == 0.0 and exponent < 0.0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    if base < 0.0 and not is_integer(exponent):
        return failure(ErrorKind.DOMAIN_ERROR)
    try:
        return checked(math.pow(base, exponent))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


def sqrt(x):
    if x < 0.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.sqrt(x))


def cbrt(x):
    return checked(math.cbrt(x))


def nthroot(x, n):
    """Real n-th root; odd roots of negative numbers are allowed."""
    if not is_integer(n):
        return failure(ErrorKind.DOMAIN_ERROR)
    n = int(n)
    if n == 0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    if n % 2 == 0 and x < 0.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    if x == 0.0 and n < 0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    try:
        root = math.pow(abs(x), 1.0 / n)
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)
    return checked(math.copysign(root, x))


# -----------------------------
# Trigonometry
# -----------------------------

def sin(x, degrees=False):
    if not is_finite(x):
        return failure(ErrorKind.INVALID_INPUT)
    return checked(math.sin(_to_radians(x, degrees)))


def cos(x, degrees=False):
    if not is_finite(x):
        return failure(ErrorKind.INVALID_INPUT)
    return checked(math.cos(_to_radians(x, degrees)))


def tan(x, degrees=False):
    if not is_finite(x):
        return failure(ErrorKind.INVALID_INPUT)
    x = _to_radians(x, degrees)

    # Undefined at odd multiples of pi/2
    normalized = math.fmod(x, math.pi)
    if abs(normalized - math.pi / 2) < POLE_TOLERANCE or abs(normalized + math.pi / 2) < POLE_TOLERANCE:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.tan(x))


def _reciprocal(result):
    if result.has_error:
        return result
    if abs(result.value) < POLE_TOLERANCE:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    return checked(1.0 / result.value)


def sec(x, degrees=False):
    return _reciprocal(cos(x, degrees))


def csc(x, degrees=False):
    return _reciprocal(sin(x, degrees))


def cot(x, degrees=False):
    return _reciprocal(tan(x, degrees))


def asin(x, degrees=False):
    if x < -1.0 or x > 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(_from_radians(math.asin(x), degrees))


def acos(x, degrees=False):
    if x < -1.0 or x > 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(_from_radians(math.acos(x), degrees))


def atan(x, degrees=False):
    return make_result(_from_radians(math.atan(x), degrees))


def atan2(y, x, degrees=False):
    return make_result(_from_radians(math.atan2(y, x), degrees))


def asec(x, degrees=False):
    if -1.0 < x < 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(_from_radians(math.acos(1.0 / x), degrees))


def acsc(x, degrees=False):
    if -1.0 < x < 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(_from_radians(math.asin(1.0 / x), degrees))


def acot(x, degrees=False):
    if x == 0.0:
        return make_result(_from_radians(math.pi / 2, degrees))
    return make_result(_from_radians(math.atan(1.0 / x), degrees))


# -----------------------------
# Hyperbolic functions
# -----------------------------

def sinh(x):
    try:
        return checked(math.sinh(x))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


def cosh(x):
    try:
        return checked(math.cosh(x))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


def tanh(x):
    return checked(math.tanh(x))


def sech(x):
    cosh_result = cosh(x)
    if cosh_result.has_error:
        return cosh_result
    return checked(1.0 / cosh_result.value)


def csch(x):
    if x == 0.0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    return _reciprocal(sinh(x))


def coth(x):
    if x == 0.0:
        return failure(ErrorKind.DIVISION_BY_ZERO)
    return checked(1.0 / math.tanh(x))


def asinh(x):
    return checked(math.asinh(x))


def acosh(x):
    if x < 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.acosh(x))


def atanh(x):
    if x <= -1.0 or x >= 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.atanh(x))


# -----------------------------
# Logarithms / exponentials
# -----------------------------

def log(x):
    """Natural logarithm."""
    if x <= 0.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.log(x))


def log10(x):
    if x <= 0.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.log10(x))


def log2(x):
    if x <= 0.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.log2(x))


def logb(x, base):
    if x <= 0.0 or base <= 0.0 or base == 1.0:
        return failure(ErrorKind.DOMAIN_ERROR)
    return checked(math.log(x) / math.log(base))


def exp(x):
    try:
        return checked(math.exp(x))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


def exp10(x):
    return power(10.0, x)


def exp2(x):
    return power(2.0, x)


# -----------------------------
# Special functions
# -----------------------------

def factorial(n):
    """n! by iterative multiplication, exact for every n that fits a double."""
    if not is_integer(n):
        return failure(ErrorKind.DOMAIN_ERROR)
    n = int(n)
    if n < 0:
        return failure(ErrorKind.DOMAIN_ERROR)
    if n > FACTORIAL_LIMIT:
        return failure(ErrorKind.OVERFLOW)

    result = 1.0
    for i in range(2, n + 1):
        result *= i
        if not is_finite(result):
            return failure(ErrorKind.OVERFLOW)
    return make_result(result)


def gamma(x):
    if x <= 0.0 and is_integer(x):
        return failure(ErrorKind.DOMAIN_ERROR)
    try:
        return checked(math.gamma(x))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)
    except ValueError:
        return failure(ErrorKind.DOMAIN_ERROR)


def absolute(x):
    return checked(math.fabs(x))


def floor(x):
    if not is_finite(x):
        return failure(ErrorKind.OVERFLOW)
    return make_result(math.floor(x))


def ceil(x):
    if not is_finite(x):
        return failure(ErrorKind.OVERFLOW)
    return make_result(math.ceil(x))


def round_half_away(x):
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not is_finite(x):
        return failure(ErrorKind.OVERFLOW)
    return make_result(math.copysign(math.floor(abs(x) + 0.5), x))


def minimum(*values):
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    return make_result(min(values))


def maximum(*values):
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    return make_result(max(values))


# -----------------------------
# Statistics (over an argument list)
# -----------------------------

def total(*values):
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    try:
        return checked(math.fsum(values))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


def mean(*values):
    sum_result = total(*values)
    if sum_result.has_error:
        return sum_result
    return checked(sum_result.value / len(values))


def median(*values):
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return checked(ordered[middle - 1] / 2 + ordered[middle] / 2)
    return make_result(ordered[middle])


def mode(*values):
    """Most frequent value, the smallest one on a tie. DOMAIN_ERROR when no value repeats."""
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    frequency = {}
    for value in values:
        frequency[value] = frequency.get(value, 0) + 1

    highest = max(frequency.values())
    modes = [value for value, count in frequency.items() if count == highest]
    if len(modes) == len(values):
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(min(modes))


def value_range(*values):
    if not values:
        return failure(ErrorKind.INVALID_INPUT)
    return checked(max(values) - min(values))


def variance(*values):
    """Population variance."""
    mean_result = mean(*values)
    if mean_result.has_error:
        return mean_result
    try:
        squared = math.fsum((value - mean_result.value) ** 2 for value in values)
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)
    return checked(squared / len(values))


def std_deviation(*values):
    variance_result = variance(*values)
    if variance_result.has_error:
        return variance_result
    return checked(math.sqrt(variance_result.value))


# -----------------------------
# Combinatorics / number theory
# -----------------------------

def permutation(n, r):
    if not (is_integer(n) and is_integer(r)):
        return failure(ErrorKind.DOMAIN_ERROR)
    n, r = int(n), int(r)
    if n < 0 or r < 0 or r > n:
        return failure(ErrorKind.DOMAIN_ERROR)

    result = 1.0
    for i in range(n, n - r, -1):
        result *= i
        if not is_finite(result):
            return failure(ErrorKind.OVERFLOW)
    return make_result(result)


def combination(n, r):
    if not (is_integer(n) and is_integer(r)):
        return failure(ErrorKind.DOMAIN_ERROR)
    n, r = int(n), int(r)
    if n < 0 or r < 0 or r > n:
        return failure(ErrorKind.DOMAIN_ERROR)

    # C(n, r) == C(n, n - r)
    if r > n - r:
        r = n - r

    result = 1.0
    for i in range(r):
        # multiply before dividing so every intermediate stays an integer
        result = result * (n - i) / (i + 1)
        if not is_finite(result):
            return failure(ErrorKind.OVERFLOW)
    return make_result(result)


def _gcd_int(a, b):
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def gcd(a, b):
    if not (is_integer(a) and is_integer(b)):
        return failure(ErrorKind.DOMAIN_ERROR)
    return make_result(_gcd_int(int(a), int(b)))


def lcm(a, b):
    if not (is_integer(a) and is_integer(b)):
        return failure(ErrorKind.DOMAIN_ERROR)
    a, b = int(a), int(b)
    if a == 0 or b == 0:
        return make_result(0.0)
    try:
        return checked(float(abs(a) // _gcd_int(a, b) * abs(b)))
    except OverflowError:
        return failure(ErrorKind.OVERFLOW)


# -----------------------------
# Complex numbers
# -----------------------------

def complex_add(a, b):
    return ComplexValue(a.real + b.real, a.imag + b.imag)


def complex_multiply(a, b):
    return ComplexValue(a.real * b.real - a.imag * b.imag,
                        a.real * b.imag + a.imag * b.real)


def complex_divide(a, b):
    """Quotient a / b; a zero divisor yields the (inf, inf) sentinel rather than an error."""
    denominator = b.real * b.real + b.imag * b.imag
    if denominator == 0.0:
        return ComplexValue(math.inf, math.inf)
    return ComplexValue((a.real * b.real + a.imag * b.imag) / denominator,
                        (a.imag * b.real - a.real * b.imag) / denominator)


def complex_magnitude(z):
    return math.hypot(z.real, z.imag)


def complex_phase(z, degrees=False):
    return _from_radians(math.atan2(z.imag, z.real), degrees)

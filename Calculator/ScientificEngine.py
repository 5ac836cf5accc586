# ScientificEngine
import math

PI = math.pi

def isPi(problem):
    if problem == "#":
        return PI
    else:
        return False

def square_root(number):
    # Negative radicands follow IEEE sqrt and give NaN instead of raising.
    if number < 0:
        return math.nan
    return math.sqrt(number)

def is_odd_integer(number):
    return math.isfinite(number) and number.is_integer() and number % 2 == 1

def power(base, exponent):
    # math.pow raises where IEEE pow gives inf or nan.
    try:
        return math.pow(base, exponent)

    except OverflowError:
        if is_odd_integer(exponent):
            return math.copysign(math.inf, base)
        return math.inf

    except ValueError:
        if base == 0:
            # 0^-n is inf, -0^-odd is -inf
            if is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base with a fractional exponent
        return math.nan

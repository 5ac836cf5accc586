# Evaluator.py
"""
Core calculation engine for the BEDMAS calculator.

Pipeline
--------
1) Normalizer: loose input -> canonical equation (see Normalizer.py)
2) Validation (find_errors): one pass over the canonical equation, fails on the first syntax error
3) Tokenizer: canonical equation -> flat list of tokens (numbers, operators, brackets, '@', '#')
4) Solver: resolves bracket groups and square roots recursively, then reduces the
   remaining operands tier by tier: '^', then '*' '/', then '+' '-'.
   Every tier runs left to right, so 27/3/3 is (27/3)/3.
5) Formatter: shortest round-trip text of the float, '52' instead of '52.0'.

Canonical alphabet: ()^@#/*+-0123456789.   ('@' = square root, '#' = π)
"""

from . import Normalizer
from . import ScientificEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = False

Digits = "0123456789"
Operations = ["^", "/", "*", "+", "-"]
Canonical_Characters = "()^@#/*+-0123456789."

# Reduction order, highest precedence first
Precedence_Tiers = [("^",), ("*", "/"), ("+", "-")]


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isOp(char):
    """Return index of a known operator or -1 if unknown."""
    try:
        return Operations.index(char)
    except ValueError:
        return -1


def format_number(value):
    """Render a float the way results are shown: shortest round-trip text, no trailing '.0'."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


# -----------------------------
# Validation
# -----------------------------

def find_errors(equation):
    """Scan a canonical equation once and raise E.SyntaxError on the first problem found.

    Positions are 1-based and point at the character that was being checked.
    """
    if len(equation) == 0:
        raise E.SyntaxError("Equation too short.", code="3100", equation=equation, position=0)

    for b, current_char in enumerate(equation):
        position = b + 1
        next_char = equation[b + 1] if b + 1 < len(equation) else None

        if current_char not in Canonical_Characters:
            raise E.SyntaxError(f"Invalid character '{current_char}' at position {position}.",
                                code="3101", equation=equation, position=position)

        if current_char == "@" and next_char != "(":
            raise E.SyntaxError(f"Square root must be wrapped in brackets (position {position}).",
                                code="3102", equation=equation, position=position)

        if current_char == "." and (next_char is None or next_char not in Digits):
            raise E.SyntaxError(f"Decimal must be followed by digits (position {position}).",
                                code="3103", equation=equation, position=position)

        if isOp(current_char) != -1 and next_char is not None and isOp(next_char) != -1:
            raise E.SyntaxError(f"Consecutive operators '{current_char}{next_char}' at position {position}.",
                                code="3104", equation=equation, position=position)


# -----------------------------
# Tokenizer
# -----------------------------

class Token:
    """One lexical unit of a canonical equation.

    kind is one of: 'number', 'pi', 'root', 'operator', '(', ')'.
    position is the 1-based index of the token's first character.
    """
    def __init__(self, kind, text, position, value=None):
        self.kind = kind
        self.text = text
        self.position = position
        self.value = value

    def __repr__(self):
        return f"Token({self.kind!r}, {self.text!r}, {self.position})"


def tokenize(equation):
    """Convert a canonical equation into a list of Tokens."""
    tokens = []
    b = 0

    while b < len(equation):
        current_char = equation[b]

        # --- Numbers: digits and one decimal separator ---
        if current_char in Digits or current_char == ".":
            start = b
            has_decimal = False

            while b < len(equation) and (equation[b] in Digits or equation[b] == "."):
                if equation[b] == ".":
                    if has_decimal:
                        raise E.SyntaxError("More than one '.' in one number.", code="3008",
                                            equation=equation, position=b + 1)
                    if b + 1 >= len(equation) or equation[b + 1] not in Digits:
                        raise E.SyntaxError(f"Decimal must be followed by digits (position {b + 1}).",
                                            code="3103", equation=equation, position=b + 1)
                    has_decimal = True
                b += 1

            text = equation[start:b]
            tokens.append(Token("number", text, start + 1, float(text)))
            continue

        # --- Operators and brackets ---
        elif isOp(current_char) != -1:
            tokens.append(Token("operator", current_char, b + 1))
        elif current_char == "(" or current_char == ")":
            tokens.append(Token(current_char, current_char, b + 1))

        # --- Square root and π ---
        elif current_char == "@":
            tokens.append(Token("root", current_char, b + 1))
        elif current_char == "#":
            tokens.append(Token("pi", current_char, b + 1, ScientificEngine.isPi(current_char)))

        else:
            raise E.SyntaxError(f"Invalid character '{current_char}' at position {b + 1}.",
                                code="3101", equation=equation, position=b + 1)

        b += 1

    return tokens


# -----------------------------
# Solver
# -----------------------------

def apply_operator(left, operator, right):
    """Combine two operands with one operator token."""
    try:
        if operator.text == "^":
            result = ScientificEngine.power(left, right)
        elif operator.text == "*":
            result = left * right
        elif operator.text == "/":
            if right == 0.0:
                raise E.DivisionByZeroError(
                    f"Division by zero: {format_number(left)}/{format_number(right)}", code="3003")
            result = left / right
        elif operator.text == "+":
            result = left + right
        elif operator.text == "-":
            result = left - right
        else:
            raise E.CalculationError(f"Unknown operator: {operator.text}", code="3011")

    except E.MathError as e:
        if e.position is None:
            e.position = operator.position
        raise

    if debug == True:
        print(f"Reduced {format_number(left)}{operator.text}{format_number(right)} -> {format_number(result)}")
    return result


def reduce_operands(operands, operators):
    """Reduce a bracket-free sequence 'operand (operator operand)*' to one value.

    Each precedence tier is applied in turn; inside a tier the left-most pair goes first.
    """
    for tier in Precedence_Tiers:
        values = [operands[0]]
        remaining = []

        for operator, right in zip(operators, operands[1:]):
            if operator.text in tier:
                values[-1] = apply_operator(values[-1], operator, right)
            else:
                remaining.append(operator)
                values.append(right)

        operands, operators = values, remaining

    return operands[0]


def evaluate_scope(tokens, b=0, opening=None):
    """Evaluate tokens from index b up to the ')' matching `opening` (or to the end).

    Bracket groups and square roots are solved recursively while scanning, left-most first,
    so the scope itself only ever reduces plain numbers.
    Returns (value, index_after_scope).
    """
    operands = []
    operators = []
    sign = None
    expect_operand = True

    while b < len(tokens):
        token = tokens[b]

        if expect_operand:
            # Leading sign of an operand, e.g. '-3+4' or '(-2)'
            if token.kind == "operator" and token.text in ("+", "-") and sign is None:
                sign = token
                b += 1
                continue

            if token.kind == "number" or token.kind == "pi":
                value = token.value
                b += 1
            elif token.kind == "(":
                value, b = evaluate_scope(tokens, b + 1, opening=token)
            elif token.kind == "root":
                if b + 1 >= len(tokens) or tokens[b + 1].kind != "(":
                    raise E.SyntaxError(f"Square root must be wrapped in brackets (position {token.position}).",
                                        code="3102", position=token.position)
                radicand, b = evaluate_scope(tokens, b + 2, opening=tokens[b + 1])
                value = ScientificEngine.square_root(radicand)
                if debug == True:
                    print(f"Square root of {format_number(radicand)} -> {format_number(value)}")
            else:
                raise E.SyntaxError(f"Missing number before '{token.text}' (position {token.position}).",
                                    code="3027", position=token.position)

            if sign is not None and sign.text == "-":
                value = -value
            sign = None
            operands.append(value)
            expect_operand = False

        else:
            if token.kind == "operator":
                operators.append(token)
                expect_operand = True
                b += 1
            elif token.kind == ")":
                if opening is None:
                    raise E.SyntaxError(f"Missing '(' for ')' at position {token.position}.",
                                        code="3010", position=token.position)
                return reduce_operands(operands, operators), b + 1
            else:
                raise E.SyntaxError(f"Missing operator before '{token.text}' (position {token.position}).",
                                    code="3011", position=token.position)

    # --- End of input ---
    if expect_operand:
        if sign is not None:
            dangling = sign
        elif operators:
            dangling = operators[-1]
        else:
            dangling = opening
        position = dangling.position if dangling is not None else 0
        raise E.SyntaxError(f"Missing number at the end (position {position}).", code="3027", position=position)

    if opening is not None:
        raise E.SyntaxError(f"Missing ')' for '(' at position {opening.position}.",
                            code="3009", position=opening.position)

    return reduce_operands(operands, operators), b


def solve(equation):
    """Reduce a canonical equation to a single number and return it as text."""
    try:
        tokens = tokenize(equation)
        if debug == True:
            print(tokens)

        value, _ = evaluate_scope(tokens)

    except E.MathError as e:
        if e.equation is None:
            e.equation = equation
        raise

    return format_number(value)


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem):
    """Main API: normalize -> find_errors -> solve. Returns the result as text."""
    equation = problem
    try:
        equation = Normalizer.normalize(problem)
        if debug == True:
            print(f"Canonical equation: {equation}")

        find_errors(equation)
        return solve(equation)

    # Re-raise our domain errors after attaching the equation they refer to
    except E.MathError as e:
        if e.equation is None:
            e.equation = equation
        raise
    except RecursionError as e:
        raise E.MathError(message="RecursionError: brackets or roots nested too deeply.",
                          code="9999", equation=equation) from e
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=f"{type(e).__name__}: {e}", code="9999", equation=equation) from e


def test_main():
    """Simple runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    print(evaluate(problem))


if __name__ == "__main__":
    test_main()

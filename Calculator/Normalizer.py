# Normalizer.py
"""
Turns loosely written input into the canonical equation read by Evaluator.

Pipeline
--------
1) Whitespace strip
2) Bracket repair: drop trailing '(' and close whatever is still open
3) Aliases: 'root' / 'sqrt' / '√' -> '@', 'pi' / 'π' -> '#', '×' -> '*', '÷' -> '/'
4) Implicit multiplication: '3(4)' -> '3*(4)', '2π' -> '2*#', ...

Canonical alphabet: ()^@#/*+-0123456789.
Nothing is evaluated here.
"""

import re

from . import error as E


DIGITS = "0123456789"

# Applied in order, plain substring replacement (no word boundaries).
# The ASCII words ignore case, the glyphs match exactly.
ALIASES = [
    ("root", "@"),
    ("sqrt", "@"),
    ("√", "@"),
    ("pi", "#"),
    ("π", "#"),
    ("×", "*"),
    ("÷", "/"),
]


def normalize(problem):
    """Run all standardization steps in order and return the canonical equation."""
    equation = "".join(problem.split())

    equation = fix_brackets(equation)
    equation = replace_special_chars(equation)
    equation = add_multiplication_signs(equation)

    return equation


def fix_brackets(equation):
    """Strip trailing '(' and append the missing ')' at the end.

    Raises E.SyntaxError if there are more ')' than '('.
    """
    equation = equation.rstrip("(")

    opening = equation.count("(")
    closing = equation.count(")")

    if closing > opening:
        raise E.SyntaxError("Too many closing brackets.", code="3105",
                            equation=equation, position=_first_unmatched_closing(equation))

    return equation + ")" * (opening - closing)


def _first_unmatched_closing(equation):
    depth = 0
    for b, current_char in enumerate(equation):
        if current_char == "(":
            depth += 1
        elif current_char == ")":
            depth -= 1
            if depth < 0:
                return b + 1
    return None


def replace_special_chars(equation):
    """Replace the different spellings of root, pi, times and divide with one symbol each."""
    for alias, symbol in ALIASES:
        if alias.isascii():
            equation = re.sub(re.escape(alias), symbol, equation, flags=re.IGNORECASE | re.ASCII)
        else:
            equation = equation.replace(alias, symbol)
    return equation


def needs_multiplication(previous, current):
    """Return True if a '*' belongs between two adjacent characters."""
    if current == "(":
        return previous in DIGITS or previous in ")#"
    if current in DIGITS:
        return previous in ")#"
    if current == "@":
        return previous in DIGITS or previous in ")#"
    if current == "#":
        return previous in DIGITS or previous == ")"
    return False


def add_multiplication_signs(equation):
    """Insert '*' where a multiplication is implied. '34(2)' becomes '34*(2)'."""
    standard = []

    for current_char in equation:
        if standard and needs_multiplication(standard[-1], current_char):
            standard.append("*")
        standard.append(current_char)

    return "".join(standard)

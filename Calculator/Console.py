# Console.py
"""
Terminal front end: reads equations line by line and prints the results.

An empty line or end of input (Ctrl+D / Ctrl+Z) quits.
"""

import sys

from . import Evaluator
from . import error as E

ACCEPTED_VALUES = "Accepted values: ( ) ^ root() pi / * + -"
PROMPT = "Enter your equation: "


def format_error(error):
    """Render a MathError as the lines printed to the terminal."""
    lines = [E.describe(error), f"Details: {error.message}"]
    if error.equation:
        lines.append(f"Equation: {error.equation}")
        if error.position:
            # Caret under the offending character of the canonical equation
            lines.append("          " + " " * (error.position - 1) + "^")
    return "\n".join(lines)


def run_once(problem):
    """Evaluate one equation and return the text to print plus whether it failed."""
    try:
        return Evaluator.evaluate(problem), False
    except E.MathError as e:
        return format_error(e), True


def main():
    print(ACCEPTED_VALUES)

    while True:
        try:
            problem = input(PROMPT)
        except EOFError:
            print()
            break

        if problem.strip() == "":
            break

        print()
        output, _ = run_once(problem)
        print(output)
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Tests for Evaluator: validation, reduction and the full evaluate() pipeline.

Checks:
1. find_errors rejects malformed canonical equations with code and position
2. solve follows BEDMAS with left-to-right reduction inside a tier
3. Square roots, pi, signs and number formatting
4. Division by zero, overflow and malformed operands
5. evaluate() wires normalize -> find_errors -> solve together
"""

import math

import pytest

from Calculator import Evaluator
from Calculator import error as E


# =============================================================================
# VALIDATION
# =============================================================================


class TestFindErrors:
    """find_errors on canonical equations"""

    def test_empty_equation(self) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.find_errors("")
        assert exc_info.value.code == "3100"

    @pytest.mark.parametrize(
        "equation, position",
        [("32x+97*(34)", 3), ("13^(7)+2!", 9), ("1 +2", 2)],
    )
    def test_illegal_chars(self, equation: str, position: int) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.find_errors(equation)
        assert exc_info.value.code == "3101"
        assert exc_info.value.position == position

    @pytest.mark.parametrize(
        "equation, position",
        [("13+@27", 4), ("12*@", 4), ("@", 1)],
    )
    def test_root_without_brackets(self, equation: str, position: int) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.find_errors(equation)
        assert exc_info.value.code == "3102"
        assert exc_info.value.position == position

    @pytest.mark.parametrize("equation, position", [("32.+9", 3), ("7.", 2), ("1+.", 3)])
    def test_non_numeric_value_after_decimal(self, equation: str, position: int) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.find_errors(equation)
        assert exc_info.value.code == "3103"
        assert exc_info.value.position == position

    @pytest.mark.parametrize(
        "equation, position",
        [("32++7", 3), ("19(+4)*/6", 7), ("7^^6", 2)],
    )
    def test_consecutive_operators(self, equation: str, position: int) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.find_errors(equation)
        assert exc_info.value.code == "3104"
        assert exc_info.value.position == position

    @pytest.mark.parametrize(
        "equation",
        ["2^2*(3^2+2^2)", "#*@(2)", ".5+1", "-3+4", "(-2)*3", "@(@(32+9^2))"],
    )
    def test_valid_equations_pass(self, equation: str) -> None:
        Evaluator.find_errors(equation)


# =============================================================================
# TOKENIZER
# =============================================================================


class TestTokenize:
    """tokenize"""

    def test_kinds_and_positions(self) -> None:
        tokens = Evaluator.tokenize("12.5+#*@(3)")
        assert [token.kind for token in tokens] == ["number", "operator", "pi", "operator", "root", "(", "number", ")"]
        assert [token.position for token in tokens] == [1, 5, 6, 7, 8, 9, 10, 11]
        assert tokens[0].value == 12.5
        assert tokens[2].value == math.pi

    def test_double_decimal_point(self) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.tokenize("1.2.3")
        assert exc_info.value.code == "3008"
        assert exc_info.value.position == 4


# =============================================================================
# REDUCTION
# =============================================================================


class TestSolve:
    """solve on canonical equations"""

    @pytest.mark.parametrize(
        "equation, expected",
        [
            ("2^2*(3^2*(4^2))", "576"),
            ("2^2*(3^2+2^2)", "52"),
            ("(2^3)+3^2*(2^3*(2^3+2^2))", "872"),
            ("(132)", "132"),
            ("((86.2))", "86.2"),
        ],
    )
    def test_bracket_equations(self, equation: str, expected: str) -> None:
        assert Evaluator.solve(equation) == expected

    def test_exponents(self) -> None:
        assert Evaluator.solve("3^5") == "243"

    def test_square_roots(self) -> None:
        assert Evaluator.solve("@(64)") == "8"
        assert Evaluator.solve("@(16+@(81))") == "5"

    @pytest.mark.parametrize(
        "equation, expected",
        [
            ("81/9/3", "3"),
            ("27/3/3", "3"),
            ("17*4*2", "136"),
            ("22+117+11", "150"),
            ("194-167-12", "15"),
            ("47-22-3", "22"),
            ("2^2^2", "16"),
            ("2^3^2", "64"),
            ("1+2*3", "7"),
            ("10-4/2", "8"),
            ("2*3^2", "18"),
        ],
    )
    def test_precedence_and_left_to_right(self, equation: str, expected: str) -> None:
        assert Evaluator.solve(equation) == expected

    def test_pi_gets_converted(self) -> None:
        assert Evaluator.solve("3.2+7") == "10.2"
        assert Evaluator.solve("3*#") == "9.42477796076938"

    @pytest.mark.parametrize(
        "equation, expected",
        [("-3+5", "2"), ("(0-9)", "-9"), ("(-2)*3", "-6"), ("-2^2", "4"), ("+4", "4")],
    )
    def test_leading_sign_belongs_to_operand(self, equation: str, expected: str) -> None:
        assert Evaluator.solve(equation) == expected

    def test_fractions_keep_shortest_text(self) -> None:
        assert Evaluator.solve("1/4") == "0.25"
        assert Evaluator.solve("10/4") == "2.5"
        assert Evaluator.solve(".5*4") == "2"

    def test_negative_square_root_is_nan(self) -> None:
        assert math.isnan(float(Evaluator.solve("@(0-9)")))

    def test_exception_on_division_by_zero(self) -> None:
        with pytest.raises(E.DivisionByZeroError) as exc_info:
            Evaluator.solve("321/(3-3)")
        assert exc_info.value.code == "3003"
        assert "321/0" in exc_info.value.message
        assert exc_info.value.position == 4

    def test_zero_to_negative_power_is_infinite(self) -> None:
        assert Evaluator.solve("0^(0-1)") == "inf"
        assert Evaluator.solve("0^(0-2)") == "inf"

    @pytest.mark.parametrize(
        "equation, expected",
        [
            ("10^400", "inf"),
            ("10^200*10^200", "inf"),
            ("(0-10)^401", "-inf"),
            ("(0-10)^400", "inf"),
            ("0-10^200*10^200", "-inf"),
            ("9" * 400, "inf"),
        ],
    )
    def test_overflow_gives_infinity(self, equation: str, expected: str) -> None:
        assert Evaluator.solve(equation) == expected

    def test_infinity_minus_infinity_is_nan(self) -> None:
        assert math.isnan(float(Evaluator.solve("10^400-10^400")))

    @pytest.mark.parametrize(
        "equation, code",
        [
            ("5+", "3027"),
            ("()", "3027"),
            ("*5", "3027"),
            ("(2", "3009"),
            ("2)", "3010"),
            ("##", "3011"),
            ("2@(4)", "3011"),
        ],
    )
    def test_malformed_operands(self, equation: str, code: str) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.solve(equation)
        assert exc_info.value.code == code
        assert exc_info.value.equation == equation


class TestFormatNumber:
    """format_number"""

    @pytest.mark.parametrize(
        "value, expected",
        [(52.0, "52"), (0.25, "0.25"), (-9.0, "-9"), (1e16, "1e+16"), (math.pi, "3.141592653589793")],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert Evaluator.format_number(value) == expected


# =============================================================================
# FULL PIPELINE
# =============================================================================


class TestEvaluate:
    """evaluate: normalize -> find_errors -> solve"""

    def test_equations_are_standardized(self) -> None:
        assert Evaluator.evaluate("(97 - 27) / (7) + 14") == "24"

    @pytest.mark.parametrize(
        "equation, expected",
        [
            ("7(9+2)(5-2)/3", "77"),
            ("36(2+3(7))", "828"),
            ("2^2*(3^2+2^2)", "52"),
            ("27/3/3", "3"),
            ("47-22-3", "22"),
            ("root(64)", "8"),
            ("√(9)×2÷3", "2"),
            ("3*pi", "9.42477796076938"),
            ("2 + 3 (", "5"),
            ("(1+2", "3"),
        ],
    )
    def test_results(self, equation: str, expected: str) -> None:
        assert Evaluator.evaluate(equation) == expected

    @pytest.mark.parametrize(
        "equation, expected",
        [
            ("156(piroot(7))^2", 10777.608005989581),
            ("156(pi3)root(7+19)^2", 38226.8994088806),
            ("@(@(32+9^2))", 3.260390438695134),
        ],
    )
    def test_nested_equations(self, equation: str, expected: float) -> None:
        assert float(Evaluator.evaluate(equation)) == pytest.approx(expected, rel=1e-12)

    def test_division_by_zero(self) -> None:
        with pytest.raises(E.DivisionByZeroError) as exc_info:
            Evaluator.evaluate("321/(3-3)")
        assert exc_info.value.equation == "321/(3-3)"

    def test_malformed_decimal_cites_position(self) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.evaluate("32.+9")
        assert exc_info.value.code == "3103"
        assert exc_info.value.position == 3
        assert exc_info.value.equation == "32.+9"

    def test_dangling_root(self) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.evaluate("5 root 4")
        assert exc_info.value.code == "3102"
        assert exc_info.value.equation == "5*@4"
        assert exc_info.value.position == 3

    @pytest.mark.parametrize("equation, code", [("", "3100"), ("   ", "3100"), ("(1+2))", "3105")])
    def test_syntax_errors(self, equation: str, code: str) -> None:
        with pytest.raises(E.SyntaxError) as exc_info:
            Evaluator.evaluate(equation)
        assert exc_info.value.code == code

    def test_unexpected_exception_is_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken_solve(equation):
            raise ValueError("boom")

        monkeypatch.setattr(Evaluator, "solve", broken_solve)

        with pytest.raises(E.MathError) as exc_info:
            Evaluator.evaluate("1+1")
        assert exc_info.value.code == "9999"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize("equation", ["10^400", "10^200*10^200", "9" * 400])
    def test_overflow_passes_through_as_infinity(self, equation: str) -> None:
        assert Evaluator.evaluate(equation) == "inf"

    def test_deep_nesting_names_the_cause(self) -> None:
        equation = "(" * 5000 + "1" + ")" * 5000

        with pytest.raises(E.MathError) as exc_info:
            Evaluator.evaluate(equation)
        assert exc_info.value.code == "9999"
        assert "nested too deeply" in exc_info.value.message
        assert exc_info.value.equation == equation
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_debug_prints_reductions(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        monkeypatch.setattr(Evaluator, "debug", True)

        assert Evaluator.evaluate("2+3") == "5"
        assert "Reduced 2+3 -> 5" in capsys.readouterr().out

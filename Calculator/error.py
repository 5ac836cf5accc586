

class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, position=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.position = position  # 1-based index into the canonical equation

class SyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass

class DivisionByZeroError(CalculationError):
    pass



#Error Messages are structured in:
# 1. Digit: Main Error (1 = Missing Files, 3 = Calculator, 4 = UI, 9 = Runtime)
# 2. Digit: Specification (0 = evaluation, 1 = validation / normalization)
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3003" : "Division by Zero",
    "3008" : "More than one '.' in one number.",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Missing operator.",
    "3027" : "Missing Number.",

    "3100" : "Equation too short.",
    "3101" : "Invalid character.",
    "3102" : "Square root must be wrapped in brackets.",
    "3103" : "Decimal must be followed by digits.",
    "3104" : "Consecutive operators.",
    "3105" : "Too many closing brackets.",


    "4002" : "Calculation already Running!",
    "4003" : "No Value in Ans.",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting



    "9999" : "Unexpected Error."
}


def describe(error):
    """Return the one-line headline for an error: 'Error <code>: <text>'."""
    return f"Error {error.code}: {ERROR_MESSAGES.get(error.code, 'Unknown error')}"

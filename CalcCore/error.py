from enum import Enum


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, position=0):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.position = position

class ParseError(MathError):
    """Raised by the evaluator for malformed input (kind is a ParseErrorKind)."""
    def __init__(self, kind, position=0, detail=None):
        super().__init__(detail or error_string(kind), code=kind.value, position=position)
        self.kind = kind

class CalculationError(MathError):
    """Raised by the evaluator when a library call failed (kind is an ErrorKind)."""
    def __init__(self, kind, position=0, detail=None):
        super().__init__(detail or error_string(kind), code=kind.value, position=position)
        self.kind = kind


class ErrorKind(Enum):
    """Error classes of the numeric operation library."""
    INVALID_INPUT = "2001"
    DIVISION_BY_ZERO = "2002"
    DOMAIN_ERROR = "2003"
    OVERFLOW = "2004"
    UNDERFLOW = "2005"
    MEMORY_ERROR = "2006"
    INVALID_FUNCTION = "2007"
    PARSE_ERROR = "2008"


class ParseErrorKind(Enum):
    """Error classes of the expression evaluator."""
    INVALID_CHARACTER = "3001"
    MISMATCHED_PARENTHESES = "3002"
    INVALID_FUNCTION = "3003"
    INVALID_SYNTAX = "3004"
    DIVISION_BY_ZERO = "3005"
    DOMAIN_ERROR = "3006"
    TOO_MANY_ARGUMENTS = "3007"
    TOO_FEW_ARGUMENTS = "3008"


Error_Dictionary = {

    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2001" : "Invalid input",
    "2002" : "Division by zero",
    "2003" : "Domain error",
    "2004" : "Overflow error",
    "2005" : "Underflow error",
    "2006" : "Memory error",
    "2007" : "Invalid function",
    "2008" : "Parse error",

    "3001" : "Invalid character",
    "3002" : "Mismatched parentheses",
    "3003" : "Invalid function",
    "3004" : "Invalid syntax",
    "3005" : "Division by zero",
    "3006" : "Domain error",
    "3007" : "Too many arguments",
    "3008" : "Too few arguments",

    "4002" : "Calculation already Running!",
    "4003" : "Invalid number for memory operation",

    "5001" : "Settings could not be saved",

    "9999" : "Unexpected Error: " #+error
}


# Arithmetic failures surface through the parse channel with this mapping;
# anything not listed becomes INVALID_FUNCTION.
PARSE_KIND_FOR = {
    ErrorKind.DIVISION_BY_ZERO: ParseErrorKind.DIVISION_BY_ZERO,
    ErrorKind.DOMAIN_ERROR: ParseErrorKind.DOMAIN_ERROR,
    ErrorKind.OVERFLOW: ParseErrorKind.DOMAIN_ERROR,
    ErrorKind.UNDERFLOW: ParseErrorKind.DOMAIN_ERROR,
}


def error_string(kind):
    """Return the fixed human-readable message for an ErrorKind / ParseErrorKind (or None -> 'Success')."""
    if kind is None:
        return "Success"
    return ERROR_MESSAGES.get(kind.value, "Unknown error")


def parse_kind_for(kind):
    return PARSE_KIND_FOR.get(kind, ParseErrorKind.INVALID_FUNCTION)

# MathEngine.py
"""""
Expression evaluator for the calculator core.

Pipeline
--------
1) Tokenizer: get_next_token() hands out one token at a time from a ParseContext.
2) Parser / Evaluator: recursive descent, evaluated eagerly (no AST is kept).
   Every arithmetic step goes through ScientificEngine, so range and domain
   problems come back as ErrorKinds instead of inf/NaN.
3) evaluate(): wraps one run into a ParseOutcome and updates CalculatorState.

Grammar
-------
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | '%') factor)*
    factor     := primary ('^' factor)?                  right-associative
    primary    := NUMBER | CONSTANT | VARIABLE
                | '-' factor | '+' factor
                | '(' expression ')'
                | FUNCTION '(' [expression (',' expression)*] ')'
"""""

import sys
from enum import Enum

from . import config_manager as config_manager
from . import ScientificEngine as SE
from . import error as E
from . import state as S

# Settings read once at import; sessions may pass their own copy to evaluate()
settings = config_manager.load_setting_value("all")

# Debug toggle for optional prints in this module
debug = bool(settings["debug"])

Operations = ["+", "-", "*", "/", "^", "%"]

# Upper bound for collected function arguments
MAX_ARGUMENTS = 10

# Python frames per nesting level on the deepest path
# (factor -> primary -> identifier -> function_call -> arguments -> expression -> term)
FRAMES_PER_LEVEL = 7
# Frames left for whatever called evaluate()
RESERVED_FRAMES = 200

# Identifier characters beyond ASCII letters/digits/underscore
SYMBOL_CHARACTERS = "√πφ"


# -----------------------------
# Lookup tables
# -----------------------------

CONSTANTS = {
    "pi": SE.PI, "π": SE.PI,
    "e": SE.E,
    "phi": SE.PHI, "φ": SE.PHI,
    "sqrt2": SE.SQRT2, "√2": SE.SQRT2,
    "ln2": SE.LN2,
    "ln10": SE.LN10,
}

MEMORY_NAMES = ("M", "mem")
ANSWER_NAMES = ("ans", "ANS")


def _log(args, degrees):
    if len(args) == 2:
        return SE.logb(args[0], args[1])
    return SE.log(args[0])


# name -> (min_args, max_args, handler(args, degrees))
FUNCTIONS = {
    "sin": (1, 1, lambda a, deg: SE.sin(a[0], deg)),
    "cos": (1, 1, lambda a, deg: SE.cos(a[0], deg)),
    "tan": (1, 1, lambda a, deg: SE.tan(a[0], deg)),
    "sec": (1, 1, lambda a, deg: SE.sec(a[0], deg)),
    "csc": (1, 1, lambda a, deg: SE.csc(a[0], deg)),
    "cot": (1, 1, lambda a, deg: SE.cot(a[0], deg)),
    "asin": (1, 1, lambda a, deg: SE.asin(a[0], deg)),
    "acos": (1, 1, lambda a, deg: SE.acos(a[0], deg)),
    "atan": (1, 1, lambda a, deg: SE.atan(a[0], deg)),
    "asec": (1, 1, lambda a, deg: SE.asec(a[0], deg)),
    "acsc": (1, 1, lambda a, deg: SE.acsc(a[0], deg)),
    "acot": (1, 1, lambda a, deg: SE.acot(a[0], deg)),
    "atan2": (2, 2, lambda a, deg: SE.atan2(a[0], a[1], deg)),

    "sinh": (1, 1, lambda a, deg: SE.sinh(a[0])),
    "cosh": (1, 1, lambda a, deg: SE.cosh(a[0])),
    "tanh": (1, 1, lambda a, deg: SE.tanh(a[0])),
    "sech": (1, 1, lambda a, deg: SE.sech(a[0])),
    "csch": (1, 1, lambda a, deg: SE.csch(a[0])),
    "coth": (1, 1, lambda a, deg: SE.coth(a[0])),
    "asinh": (1, 1, lambda a, deg: SE.asinh(a[0])),
    "acosh": (1, 1, lambda a, deg: SE.acosh(a[0])),
    "atanh": (1, 1, lambda a, deg: SE.atanh(a[0])),

    "log": (1, 2, _log),
    "ln": (1, 1, lambda a, deg: SE.log(a[0])),
    "log10": (1, 1, lambda a, deg: SE.log10(a[0])),
    "log2": (1, 1, lambda a, deg: SE.log2(a[0])),
    "logb": (2, 2, lambda a, deg: SE.logb(a[0], a[1])),
    "exp": (1, 1, lambda a, deg: SE.exp(a[0])),
    "exp10": (1, 1, lambda a, deg: SE.exp10(a[0])),
    "exp2": (1, 1, lambda a, deg: SE.exp2(a[0])),

    "sqrt": (1, 1, lambda a, deg: SE.sqrt(a[0])),
    "√": (1, 1, lambda a, deg: SE.sqrt(a[0])),
    "cbrt": (1, 1, lambda a, deg: SE.cbrt(a[0])),
    "nthrt": (2, 2, lambda a, deg: SE.nthroot(a[0], a[1])),
    "pow": (2, 2, lambda a, deg: SE.power(a[0], a[1])),

    "abs": (1, 1, lambda a, deg: SE.absolute(a[0])),
    "floor": (1, 1, lambda a, deg: SE.floor(a[0])),
    "ceil": (1, 1, lambda a, deg: SE.ceil(a[0])),
    "round": (1, 1, lambda a, deg: SE.round_half_away(a[0])),
    "mod": (2, 2, lambda a, deg: SE.mod(a[0], a[1])),
    "factorial": (1, 1, lambda a, deg: SE.factorial(a[0])),
    "gamma": (1, 1, lambda a, deg: SE.gamma(a[0])),

    "perm": (2, 2, lambda a, deg: SE.permutation(a[0], a[1])),
    "comb": (2, 2, lambda a, deg: SE.combination(a[0], a[1])),
    "gcd": (2, 2, lambda a, deg: SE.gcd(a[0], a[1])),
    "lcm": (2, 2, lambda a, deg: SE.lcm(a[0], a[1])),
    "min": (1, MAX_ARGUMENTS, lambda a, deg: SE.minimum(*a)),
    "max": (1, MAX_ARGUMENTS, lambda a, deg: SE.maximum(*a)),

    "sum": (1, MAX_ARGUMENTS, lambda a, deg: SE.total(*a)),
    "mean": (1, MAX_ARGUMENTS, lambda a, deg: SE.mean(*a)),
    "median": (1, MAX_ARGUMENTS, lambda a, deg: SE.median(*a)),
    "mode": (1, MAX_ARGUMENTS, lambda a, deg: SE.mode(*a)),
    "range": (1, MAX_ARGUMENTS, lambda a, deg: SE.value_range(*a)),
    "var": (1, MAX_ARGUMENTS, lambda a, deg: SE.variance(*a)),
    "stddev": (1, MAX_ARGUMENTS, lambda a, deg: SE.std_deviation(*a)),

    # complex number given as (real, imag)
    "magnitude": (2, 2, lambda a, deg: SE.checked(SE.complex_magnitude(SE.ComplexValue(a[0], a[1])))),
    "phase": (2, 2, lambda a, deg: SE.make_result(SE.complex_phase(SE.ComplexValue(a[0], a[1]), deg))),
}

BINARY_OPERATIONS = {
    "+": SE.add,
    "-": SE.subtract,
    "*": SE.multiply,
    "/": SE.divide,
    "%": SE.mod,
}


def is_function_name(name):
    return name in FUNCTIONS


def is_constant_name(name):
    return name in CONSTANTS


def is_variable_name(name):
    return name in MEMORY_NAMES or name in ANSWER_NAMES


def is_operator(char):
    return char in Operations


def is_digit(char):
    # ASCII only: float() rejects things like '²' that str.isdigit() accepts
    return "0" <= char <= "9"


# -----------------------------
# Tokens / parse context
# -----------------------------

class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    IDENTIFIER = "identifier"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    END = "end"
    UNKNOWN = "unknown"


class Token:
    def __init__(self, kind, text="", position=0, number_value=0.0):
        self.kind = kind
        self.text = text
        self.position = position
        self.number_value = number_value

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, pos={self.position})"


def safe_nesting_depth():
    """Deepest nesting the interpreter's recursion limit can evaluate."""
    return max(1, (sys.getrecursionlimit() - RESERVED_FRAMES) // FRAMES_PER_LEVEL)


class ParseContext:
    """Cursor over one expression plus the state it is evaluated against."""
    def __init__(self, text, state, max_depth=None):
        self.text = text
        self.position = 0
        self.length = len(text)
        self.state = state
        requested = max_depth if max_depth is not None else settings["max_nesting_depth"]
        self.max_depth = min(requested, safe_nesting_depth())
        self.depth = 0
        self.open_groups = 0
        self.current_token = None

    def advance(self):
        self.current_token = get_next_token(self)
        return self.current_token


# -----------------------------
# Tokenizer
# -----------------------------

def _is_identifier_start(char):
    return char.isalpha() or char == "_" or char in SYMBOL_CHARACTERS


def _is_identifier_part(char):
    return char.isalnum() or char == "_" or char in SYMBOL_CHARACTERS


def skip_whitespace(ctx):
    while ctx.position < ctx.length and ctx.text[ctx.position].isspace():
        ctx.position += 1


def _scan_number(ctx):
    """Consume digits, one '.', and an optional exponent that has digits after it."""
    text = ctx.text
    start = ctx.position
    b = start
    has_dot = False

    while b < ctx.length and (is_digit(text[b]) or (text[b] == "." and not has_dot)):
        if text[b] == ".":
            has_dot = True
        b += 1

    # exponent: e / E, optional sign, at least one digit
    if b < ctx.length and text[b] in "eE":
        e = b + 1
        if e < ctx.length and text[e] in "+-":
            e += 1
        if e < ctx.length and is_digit(text[e]):
            while e < ctx.length and is_digit(text[e]):
                e += 1
            b = e

    ctx.position = b
    literal = text[start:b]
    return Token(TokenKind.NUMBER, literal, start, float(literal))


def get_next_token(ctx):
    """Return the next token and move the cursor behind it. END is returned for every call past the input."""
    skip_whitespace(ctx)

    if ctx.position >= ctx.length:
        return Token(TokenKind.END, "", ctx.length)

    start = ctx.position
    current_char = ctx.text[start]
    next_char = ctx.text[start + 1] if start + 1 < ctx.length else ""

    # --- Numbers ---
    if is_digit(current_char) or (current_char == "." and is_digit(next_char)):
        return _scan_number(ctx)

    # --- Identifiers (functions, constants, variables) ---
    if _is_identifier_start(current_char):
        b = start
        while b < ctx.length and _is_identifier_part(ctx.text[b]):
            b += 1
        ctx.position = b
        return Token(TokenKind.IDENTIFIER, ctx.text[start:b], start)

    ctx.position += 1

    if is_operator(current_char):
        return Token(TokenKind.OPERATOR, current_char, start)
    elif current_char == "(":
        return Token(TokenKind.LEFT_PAREN, current_char, start)
    elif current_char == ")":
        return Token(TokenKind.RIGHT_PAREN, current_char, start)
    elif current_char == ",":
        return Token(TokenKind.COMMA, current_char, start)

    return Token(TokenKind.UNKNOWN, current_char, start)


# -----------------------------
# Parser / evaluator (recursive descent)
# -----------------------------

def _apply(result, position):
    """Unwrap a NumericResult or raise its error at the given position."""
    if result.has_error:
        raise E.CalculationError(result.error_kind, position=position)
    return result.value


def _unexpected(ctx, token):
    """Raise the most specific error for a token the grammar cannot use here."""
    if token.kind == TokenKind.UNKNOWN:
        raise E.ParseError(E.ParseErrorKind.INVALID_CHARACTER, token.position,
                           f"Invalid character: '{token.text}'")
    if token.kind == TokenKind.END and ctx.open_groups > 0:
        raise E.ParseError(E.ParseErrorKind.MISMATCHED_PARENTHESES, token.position)
    if token.kind == TokenKind.END:
        raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, token.position, "Unexpected end of expression")
    raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, token.position, f"Unexpected token: '{token.text}'")


def _expect_right_paren(ctx):
    token = ctx.current_token
    if token.kind == TokenKind.RIGHT_PAREN:
        ctx.open_groups -= 1
        ctx.advance()
        return
    if token.kind == TokenKind.UNKNOWN:
        _unexpected(ctx, token)
    raise E.ParseError(E.ParseErrorKind.MISMATCHED_PARENTHESES, token.position, "Missing ')'")


def parse_expression(ctx):
    """Addition and subtraction."""
    result = parse_term(ctx)
    while ctx.current_token.kind == TokenKind.OPERATOR and ctx.current_token.text in ("+", "-"):
        operator = ctx.current_token
        ctx.advance()
        right = parse_term(ctx)
        result = _apply(BINARY_OPERATIONS[operator.text](result, right), operator.position)
    return result


def parse_term(ctx):
    """Multiplication, division and remainder."""
    result = parse_factor(ctx)
    while ctx.current_token.kind == TokenKind.OPERATOR and ctx.current_token.text in ("*", "/", "%"):
        operator = ctx.current_token
        ctx.advance()
        right = parse_factor(ctx)
        result = _apply(BINARY_OPERATIONS[operator.text](result, right), operator.position)
    return result


def parse_factor(ctx):
    """Exponentiation; the exponent is itself a factor, which makes '^' right-associative."""
    # every recursive path passes through here, so this bounds the nesting
    ctx.depth += 1
    if ctx.depth > ctx.max_depth:
        raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, ctx.current_token.position,
                           "Expression nested too deeply")

    base = parse_primary(ctx)
    if ctx.current_token.kind == TokenKind.OPERATOR and ctx.current_token.text == "^":
        operator = ctx.current_token
        ctx.advance()
        exponent = parse_factor(ctx)
        base = _apply(SE.power(base, exponent), operator.position)

    ctx.depth -= 1
    return base


def parse_primary(ctx):
    """Numbers, constants, variables, unary sign, groups and function calls."""
    token = ctx.current_token

    if token.kind == TokenKind.NUMBER:
        ctx.advance()
        if not SE.is_finite(token.number_value):
            raise E.CalculationError(E.ErrorKind.OVERFLOW, position=token.position)
        return token.number_value

    # Unary sign applies to a whole factor: -2^2 == -(2^2)
    if token.kind == TokenKind.OPERATOR and token.text in ("-", "+"):
        ctx.advance()
        operand = parse_factor(ctx)
        return -operand if token.text == "-" else operand

    if token.kind == TokenKind.LEFT_PAREN:
        ctx.open_groups += 1
        ctx.advance()
        value = parse_expression(ctx)
        _expect_right_paren(ctx)
        return value

    if token.kind == TokenKind.IDENTIFIER:
        return parse_identifier(ctx)

    _unexpected(ctx, token)


def parse_identifier(ctx):
    token = ctx.current_token
    name = token.text

    if is_function_name(name):
        return parse_function_call(ctx)

    if is_constant_name(name):
        ctx.advance()
        return CONSTANTS[name]

    if name in MEMORY_NAMES:
        ctx.advance()
        return S.memory_recall(ctx.state)

    if name in ANSWER_NAMES:
        ctx.advance()
        return ctx.state.last_result

    ctx.advance()
    if ctx.current_token.kind == TokenKind.LEFT_PAREN:
        # Unknown name used like a function: evaluate the arguments first, then reject the name
        parse_arguments(ctx)
        raise E.ParseError(E.ParseErrorKind.INVALID_FUNCTION, token.position, f"Unknown function: '{name}'")
    raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, token.position, f"Unknown variable: '{name}'")


def parse_arguments(ctx):
    """Parse '(' [expression (',' expression)*] ')' and return the evaluated arguments."""
    if ctx.current_token.kind != TokenKind.LEFT_PAREN:
        raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, ctx.current_token.position,
                           "Missing '(' after function name")
    ctx.open_groups += 1
    ctx.advance()

    args = []
    if ctx.current_token.kind != TokenKind.RIGHT_PAREN:
        while True:
            if len(args) >= MAX_ARGUMENTS:
                raise E.ParseError(E.ParseErrorKind.TOO_MANY_ARGUMENTS, ctx.current_token.position)
            args.append(parse_expression(ctx))
            if ctx.current_token.kind != TokenKind.COMMA:
                break
            ctx.advance()

    _expect_right_paren(ctx)
    return args


def parse_function_call(ctx):
    name_token = ctx.current_token
    ctx.advance()
    args = parse_arguments(ctx)

    min_args, max_args, handler = FUNCTIONS[name_token.text]
    if len(args) < min_args:
        raise E.ParseError(E.ParseErrorKind.TOO_FEW_ARGUMENTS, name_token.position,
                           f"Too few arguments for '{name_token.text}'")
    if len(args) > max_args:
        raise E.ParseError(E.ParseErrorKind.TOO_MANY_ARGUMENTS, name_token.position,
                           f"Too many arguments for '{name_token.text}'")

    return _apply(handler(args, ctx.state.angle_in_degrees), name_token.position)


# -----------------------------
# Public entry points
# -----------------------------

class ParseOutcome:
    """Terminal result of one evaluation.

    error_kind is the parse-channel classification; arithmetic_error keeps the
    ErrorKind of a failed library call (None for purely syntactic errors).
    """
    def __init__(self, value=0.0, error_kind=None, error_position=0, message="", arithmetic_error=None):
        self.value = 0.0 if error_kind is not None else value
        self.error_kind = error_kind
        self.error_position = error_position
        self.message = message
        self.arithmetic_error = arithmetic_error

    @property
    def has_error(self):
        return self.error_kind is not None

    def __repr__(self):
        if self.has_error:
            return f"ParseOutcome(error={self.error_kind.name}, position={self.error_position}, message={self.message!r})"
        return f"ParseOutcome({self.value!r})"


def evaluate(expression, state, config=None):
    """Evaluate one expression against a calculator state.

    The (truncated) expression text is recorded first; last_result is only
    updated on success. Errors never escape: they come back inside the outcome.
    `config` supplies max_nesting_depth and max_expression_length; it defaults
    to the settings loaded at import.
    """
    if state is None:
        return ParseOutcome(error_kind=E.ParseErrorKind.INVALID_SYNTAX,
                            message=E.error_string(E.ErrorKind.INVALID_INPUT),
                            arithmetic_error=E.ErrorKind.INVALID_INPUT)

    if config is None:
        config = settings
    expression = expression or ""
    state.last_expression = S.truncate_expression(expression, config["max_expression_length"])

    try:
        if not expression.strip():
            raise E.ParseError(E.ParseErrorKind.INVALID_SYNTAX, 0, "Empty expression")

        ctx = ParseContext(expression, state, config["max_nesting_depth"])
        ctx.advance()
        value = parse_expression(ctx)

        # a complete expression must be followed by the end of input
        trailing = ctx.current_token
        if trailing.kind == TokenKind.RIGHT_PAREN:
            raise E.ParseError(E.ParseErrorKind.MISMATCHED_PARENTHESES, trailing.position, "Missing '('")
        if trailing.kind != TokenKind.END:
            _unexpected(ctx, trailing)

    except E.ParseError as e:
        outcome = ParseOutcome(error_kind=e.kind, error_position=e.position, message=e.message)

    except RecursionError:
        # the caller was already deeper in the stack than RESERVED_FRAMES allows for
        outcome = ParseOutcome(error_kind=E.ParseErrorKind.INVALID_SYNTAX, message="Expression nested too deeply")

    except E.CalculationError as e:
        outcome = ParseOutcome(error_kind=E.parse_kind_for(e.kind), error_position=e.position,
                               message=e.message, arithmetic_error=e.kind)

    else:
        state.last_result = value
        outcome = ParseOutcome(value)

    if debug == True:
        print(f"evaluate({expression!r}) -> {outcome}")

    return outcome


def calculate(expression, state, config=None):
    """Evaluate and report as a NumericResult, keeping the arithmetic ErrorKind when there is one."""
    outcome = evaluate(expression, state, config)
    if not outcome.has_error:
        return SE.make_result(outcome.value)
    return SE.failure(outcome.arithmetic_error or E.ErrorKind.PARSE_ERROR)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    session = S.create_state()
    print("Enter the problem: ")
    problem = input()
    outcome = evaluate(problem, session)
    if outcome.has_error:
        print(f"ERROR: {outcome.message} (position {outcome.error_position})")
    else:
        print(outcome.value)


if __name__ == "__main__":
    test_main()

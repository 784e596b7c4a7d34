"""
Code Stopper Rule Sets

One rule set per language family. Each takes a trimmed line and returns a
Verdict; checks run in order and the first failure wins. Rules only look at
the line itself: no tokenizer, no state carried between lines, so a trigger
word inside a string literal still triggers.
"""

from typing import Callable, Iterable

from .verdict import Verdict

RuleSet = Callable[[str], Verdict]


# --- Primitives ---

def parens_balanced(line: str) -> bool:
    """Same number of '(' and ')' on the line"""
    return line.count("(") == line.count(")")


def count_unescaped(line: str, quote: str) -> int:
    """Count quote characters not preceded by a backslash escape"""
    count = 0
    escaped = False
    for char in line:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == quote:
            count += 1
    return count


def ends_with_any(line: str, terminators: Iterable[str]) -> bool:
    return line.endswith(tuple(terminators))


def contains_any(line: str, needles: Iterable[str]) -> bool:
    return any(needle in line for needle in needles)


# --- Java ---

JAVA_DECLARATION_MARKERS = ("class ", "void ", "public ", "private ", "protected ")
JAVA_TERMINATORS = ("{", ";", "}")


def validate_java(line: str) -> Verdict:
    if contains_any(line, JAVA_DECLARATION_MARKERS) and not ends_with_any(line, JAVA_TERMINATORS):
        return Verdict.reject("Java structures must end with '{' or a semicolon ';'")

    if not parens_balanced(line):
        return Verdict.reject("Unbalanced parentheses '()'. Close your arguments.")

    if not ends_with_any(line, JAVA_TERMINATORS) and not line.startswith(("//", "@")):
        # import/package lines may still be in progress
        if not line.startswith(("import", "package")):
            return Verdict.reject("Missing semicolon ';' at the end of the statement.")

    return Verdict.ok()


# --- Python ---

PYTHON_BLOCK_KEYWORDS = frozenset({
    "def", "if", "else", "elif", "for", "while", "class", "with",
    "try", "except", "finally", "async", "match", "case",
})


def validate_python(line: str) -> Verdict:
    first_word = (line.split() or [""])[0]
    if first_word in PYTHON_BLOCK_KEYWORDS and not line.endswith(":"):
        return Verdict.reject(f"Python '{first_word}' blocks must end with a colon ':'")

    # Triple quotes may open a docstring that closes on a later line
    if count_unescaped(line, "'") % 2 != 0 and "'''" not in line:
        return Verdict.reject("Unclosed single quote detected.")
    if count_unescaped(line, '"') % 2 != 0 and '"""' not in line:
        return Verdict.reject("Unclosed double quote detected.")

    return Verdict.ok()


# --- JavaScript / TypeScript ---

JS_BLOCK_KEYWORDS = ("function", "if", "else", "for", "while", "switch", "try", "catch")
JS_BLOCK_TERMINATORS = ("{", "}", ";")
JS_ARROW_TERMINATORS = ("{", ";", ",", ")")


def validate_javascript(line: str) -> Verdict:
    if (
        contains_any(line, JS_BLOCK_KEYWORDS)
        and "(" in line
        and parens_balanced(line)
        and not ends_with_any(line, JS_BLOCK_TERMINATORS)
    ):
        return Verdict.reject("JS block statement missing opening brace '{'")

    if "=>" in line and not ends_with_any(line, JS_ARROW_TERMINATORS):
        return Verdict.reject("Arrow function needs a body or expression.")

    return Verdict.ok()


# --- C / C++ ---

C_DECLARATION_MARKERS = ("class ", "void ", "int ", "struct ")
C_TERMINATORS = ("{", ";", "}")


def validate_cpp(line: str) -> Verdict:
    if (
        contains_any(line, C_DECLARATION_MARKERS)
        and "(" in line
        and not ends_with_any(line, C_TERMINATORS)
    ):
        return Verdict.reject("C/C++ function/class definitions must end with '{' or ';'")

    if not parens_balanced(line):
        return Verdict.reject("Unbalanced parentheses.")

    return Verdict.ok()


# --- Go ---

GO_CONTROL_PREFIXES = ("if ", "for ", "switch ")


def validate_go(line: str) -> Verdict:
    is_func = line.startswith("func ") or " func " in line
    if is_func and "(" in line and parens_balanced(line) and not line.endswith("{"):
        return Verdict.reject("Go function declarations must end with '{'")

    if line.startswith(GO_CONTROL_PREFIXES) and not line.endswith("{"):
        return Verdict.reject("Go control statements must end with '{'")

    return Verdict.ok()


# --- Rust ---

def validate_rust(line: str) -> Verdict:
    if line.startswith("fn ") and "(" in line and parens_balanced(line) and not line.endswith("{"):
        return Verdict.reject("Rust function declarations must end with '{'")

    if line.startswith("let ") and not ends_with_any(line, (";", "{")):
        return Verdict.reject("Rust let statements must end with ';'")

    return Verdict.ok()

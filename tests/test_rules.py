"""
Tests for the per-language rule sets.
"""

import pytest

from code_stopper.rules import (
    count_unescaped,
    parens_balanced,
    validate_cpp,
    validate_go,
    validate_java,
    validate_javascript,
    validate_python,
    validate_rust,
)


class TestPrimitives:
    """Tests for the shared line primitives."""

    def test_parens_balanced(self):
        assert parens_balanced("foo(bar(1), 2)")
        assert parens_balanced("no parens at all")
        assert not parens_balanced("foo(bar(1)")
        assert not parens_balanced("x)")

    def test_count_unescaped_skips_escaped_quotes(self):
        assert count_unescaped("'it\\'s'", "'") == 2

    def test_count_unescaped_escaped_backslash(self):
        """A doubled backslash does not escape the following quote."""
        assert count_unescaped("'\\\\'", "'") == 2


class TestJava:
    """Tests for validate_java()."""

    def test_method_without_brace(self):
        verdict = validate_java("public void foo(int x)")
        assert not verdict.valid
        assert "'{'" in verdict.message
        assert "';'" in verdict.message

    def test_method_with_brace(self):
        assert validate_java("public void foo(int x) {").valid

    def test_class_declaration(self):
        assert not validate_java("public class Main").valid
        assert validate_java("public class Main {").valid

    def test_unbalanced_parentheses(self):
        verdict = validate_java('System.out.println("hi"')
        assert not verdict.valid
        assert "Unbalanced parentheses" in verdict.message

    def test_missing_semicolon(self):
        verdict = validate_java("int x = 5")
        assert not verdict.valid
        assert "Missing semicolon" in verdict.message

    def test_statement_with_semicolon(self):
        assert validate_java("int x = 5;").valid

    @pytest.mark.parametrize("line", [
        "@Override",
        "import java.util.List",
        "package com.example",
        "}",
        "return x;",
    ])
    def test_allowed_lines(self, line):
        assert validate_java(line).valid

    def test_declaration_checked_before_parens(self):
        """The terminator rule wins over the paren rule."""
        verdict = validate_java("private int size(")
        assert "must end with" in verdict.message


class TestPython:
    """Tests for validate_python()."""

    def test_for_without_colon(self):
        verdict = validate_python("for i in range(10)")
        assert not verdict.valid
        assert verdict.message == "Python 'for' blocks must end with a colon ':'"

    def test_for_with_colon(self):
        assert validate_python("for i in range(10):").valid

    @pytest.mark.parametrize("line", [
        "def main()",
        "if x > 0",
        "elif x < 0",
        "else",
        "while True",
        "class Foo(Base)",
        "with open(path) as f",
        "try",
        "except ValueError as e",
        "finally",
        "async def fetch()",
        "match command",
        "case [x, y]",
    ])
    def test_block_keywords_need_colon(self, line):
        verdict = validate_python(line)
        assert not verdict.valid
        assert "colon" in verdict.message

    def test_keyword_must_be_first_token(self):
        """'if' inside an expression is not a block opener."""
        assert validate_python("x = a if b else c").valid

    def test_unclosed_single_quote(self):
        verdict = validate_python("x = 'unterminated")
        assert not verdict.valid
        assert verdict.message == "Unclosed single quote detected."

    def test_unclosed_double_quote(self):
        verdict = validate_python('x = "unterminated')
        assert not verdict.valid
        assert verdict.message == "Unclosed double quote detected."

    def test_escaped_quote_is_not_counted(self):
        assert validate_python("x = 'it\\'s'").valid

    def test_triple_quotes_allowed(self):
        assert validate_python('"""Start of a docstring').valid
        assert validate_python("x = '''text").valid

    def test_plain_statement(self):
        assert validate_python("print('hello')").valid


class TestJavaScript:
    """Tests for validate_javascript()."""

    def test_arrow_without_body(self):
        verdict = validate_javascript("const f = (x) =>")
        assert not verdict.valid
        assert verdict.message == "Arrow function needs a body or expression."

    def test_arrow_with_expression(self):
        assert validate_javascript("const f = (x) => x + 1;").valid

    @pytest.mark.parametrize("line", [
        "const f = (x) => {",
        "items.map((x) => x * 2)",
        "handlers.push((e) => e,",
    ])
    def test_arrow_terminators(self, line):
        assert validate_javascript(line).valid

    def test_block_without_brace(self):
        verdict = validate_javascript("if (x > 0)")
        assert not verdict.valid
        assert verdict.message == "JS block statement missing opening brace '{'"

    def test_block_with_brace(self):
        assert validate_javascript("if (x > 0) {").valid
        assert validate_javascript("function add(a, b) {").valid

    def test_unbalanced_block_header_allowed(self):
        """A condition still being typed across lines is not blocked."""
        assert validate_javascript("while (a &&").valid

    def test_statement_without_semicolon_allowed(self):
        assert validate_javascript("const total = a + b").valid


class TestCpp:
    """Tests for validate_cpp()."""

    def test_function_without_brace(self):
        verdict = validate_cpp("int main()")
        assert not verdict.valid
        assert "must end with '{' or ';'" in verdict.message

    def test_function_with_brace(self):
        assert validate_cpp("int main() {").valid

    def test_prototype(self):
        assert validate_cpp("void helper(int x);").valid

    def test_unbalanced_parentheses(self):
        verdict = validate_cpp('printf("hi"')
        assert not verdict.valid
        assert verdict.message == "Unbalanced parentheses."

    def test_declaration_without_call(self):
        assert validate_cpp("int x = 5").valid


class TestGo:
    """Tests for validate_go()."""

    def test_func_without_brace(self):
        verdict = validate_go("func add(a, b int) int")
        assert not verdict.valid
        assert verdict.message == "Go function declarations must end with '{'"

    def test_func_with_brace(self):
        assert validate_go("func add(a, b int) int {").valid

    def test_func_literal(self):
        assert not validate_go("go func ()").valid

    @pytest.mark.parametrize("line", ["if x > 0", "for i := 0; i < 10; i++", "switch mode"])
    def test_control_without_brace(self, line):
        verdict = validate_go(line)
        assert not verdict.valid
        assert verdict.message == "Go control statements must end with '{'"

    def test_control_with_brace(self):
        assert validate_go("for i := 0; i < 10; i++ {").valid

    def test_assignment(self):
        assert validate_go("x := 5").valid


class TestRust:
    """Tests for validate_rust()."""

    def test_let_without_semicolon(self):
        verdict = validate_rust("let x = 5")
        assert not verdict.valid
        assert verdict.message == "Rust let statements must end with ';'"

    def test_let_with_semicolon(self):
        assert validate_rust("let x = 5;").valid

    def test_let_opening_block(self):
        assert validate_rust("let value = match x {").valid

    def test_fn_without_brace(self):
        verdict = validate_rust("fn main()")
        assert not verdict.valid
        assert verdict.message == "Rust function declarations must end with '{'"

    def test_fn_with_brace(self):
        assert validate_rust("fn main() {").valid


class TestDirectCalls:
    """Rule sets called without the dispatcher's blank-line filter."""

    @pytest.mark.parametrize("rule_set", [
        validate_java,
        validate_python,
        validate_javascript,
        validate_cpp,
        validate_go,
        validate_rust,
    ])
    def test_empty_line(self, rule_set):
        verdict = rule_set("")
        assert verdict.valid or verdict.message

    def test_python_empty_line_is_valid(self):
        assert validate_python("").valid

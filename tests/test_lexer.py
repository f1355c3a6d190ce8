"""Tests for the Monkey lexer."""

from monkey.lexer import Lexer, tokenize
from monkey.tokens import TK_EOF, TK_IDENT, TK_ILLEGAL, TK_INT, TK_STRING, Token


def _types(source: str) -> list[str]:
    return [t.type for t in tokenize(source)]


def _pairs(source: str) -> list[tuple[str, str]]:
    return [(t.type, t.value) for t in tokenize(source)]


def test_single_char_tokens():
    assert _types("=+(){},;") == ["=", "+", "(", ")", "{", "}", ",", ";", TK_EOF]


def test_operators_and_delimiters():
    assert _types("!-/*5 < > [ ] :") == [
        "!",
        "-",
        "/",
        "*",
        TK_INT,
        "<",
        ">",
        "[",
        "]",
        ":",
        TK_EOF,
    ]


def test_two_char_operators():
    assert _pairs("10 == 10; 10 != 9;") == [
        (TK_INT, "10"),
        ("==", "=="),
        (TK_INT, "10"),
        (";", ";"),
        (TK_INT, "10"),
        ("!=", "!="),
        (TK_INT, "9"),
        (";", ";"),
        (TK_EOF, ""),
    ]


def test_bang_and_assign_stay_separate():
    assert _types("! =") == ["!", "=", TK_EOF]
    assert _types("!!") == ["!", "!", TK_EOF]


def test_keywords_and_identifiers():
    src = "let five = fn(x, y) { if (x) { return true; } else { false } };"
    pairs = _pairs(src)
    assert pairs[0] == ("let", "let")
    assert pairs[1] == (TK_IDENT, "five")
    assert pairs[3] == ("fn", "fn")
    assert ("if", "if") in pairs
    assert ("return", "return") in pairs
    assert ("true", "true") in pairs
    assert ("else", "else") in pairs
    assert ("false", "false") in pairs


def test_identifiers_with_underscore():
    assert _pairs("foo_bar _x") == [
        (TK_IDENT, "foo_bar"),
        (TK_IDENT, "_x"),
        (TK_EOF, ""),
    ]


def test_digits_end_identifier():
    assert _pairs("abc1") == [(TK_IDENT, "abc"), (TK_INT, "1"), (TK_EOF, "")]


def test_strings():
    assert _pairs('"foobar" "foo bar" ""') == [
        (TK_STRING, "foobar"),
        (TK_STRING, "foo bar"),
        (TK_STRING, ""),
        (TK_EOF, ""),
    ]


def test_string_keeps_backslashes():
    assert _pairs(r'"a\"') == [(TK_STRING, "a\\"), (TK_EOF, "")]


def test_unterminated_string_is_illegal():
    toks = list(tokenize('"abc'))
    assert toks[0].type == TK_ILLEGAL
    assert toks[0].value == '"abc'
    assert toks[-1].type == TK_EOF


def test_unknown_character_is_illegal():
    assert _pairs("@ 1") == [(TK_ILLEGAL, "@"), (TK_INT, "1"), (TK_EOF, "")]


def test_integer_bounds():
    assert _pairs("9223372036854775807")[0] == (TK_INT, "9223372036854775807")
    assert _pairs("9223372036854775808")[0] == (TK_ILLEGAL, "9223372036854775808")


def test_very_long_integer_is_illegal():
    digits = "1" * 5000
    assert _pairs(digits) == [(TK_ILLEGAL, digits), (TK_EOF, "")]


def test_leading_zeros_do_not_count_toward_bounds():
    digits = "0" * 5000 + "9223372036854775807"
    assert _pairs(digits)[0] == (TK_INT, digits)
    assert _pairs("0" * 5000 + "9223372036854775808")[0][0] == TK_ILLEGAL


def test_whitespace_is_skipped():
    assert _types(" \t\r\n 1 \n") == [TK_INT, TK_EOF]


def test_positions():
    toks = list(tokenize("let x = 5;\n  x + 10"))
    assert [(t.value, t.line, t.col) for t in toks] == [
        ("let", 1, 1),
        ("x", 1, 5),
        ("=", 1, 7),
        ("5", 1, 9),
        (";", 1, 10),
        ("x", 2, 3),
        ("+", 2, 5),
        ("10", 2, 7),
        ("", 2, 9),
    ]


def test_eof_repeats():
    lexer = Lexer("")
    assert lexer.next_token().type == TK_EOF
    assert lexer.next_token().type == TK_EOF
    assert lexer.next_token().type == TK_EOF


def test_tokenize_is_lazy():
    stream = tokenize("1 2 3")
    assert next(stream).value == "1"
    assert next(stream).value == "2"


def test_token_equality_ignores_position():
    assert Token(TK_INT, "1", 1, 1) == Token(TK_INT, "1", 3, 7)
    assert Token(TK_INT, "1", 1, 1) != Token(TK_INT, "2", 1, 1)

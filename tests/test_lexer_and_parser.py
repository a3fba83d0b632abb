import pytest
from hypothesis import given, strategies as st

from lish.debug_utils.pprint import quote_string
from lish.errors import LishSyntaxError
from lish.reader.expression import Expression
from lish.reader.lexer import lex
from lish.reader.parser import parse
from lish.reader.tokens import Location, TokenKind


def _kinds(source):
    return [(t.kind, t.value) for t in lex(source)]


S, V, N, L, Y = TokenKind.STRING, TokenKind.VARIABLE, TokenKind.NUMBER, TokenKind.LITERAL, TokenKind.SYMBOL
NL = TokenKind.NEWLINE


@pytest.mark.parametrize(
    "source,expected",
    [
        ("ls -la", [(S, "ls"), (S, "-la")]),
        ("$x", [(V, "x")]),
        ("$", [(S, "$")]),
        ("12 -3.5 1e3", [(N, 12), (N, -3.5), (N, 1000.0)]),
        ("true false null", [(L, True), (L, False), (L, None)]),
        ("(a [b] {c d})", [(Y, "("), (S, "a"), (Y, "["), (S, "b"), (Y, "]"),
                            (Y, "{"), (S, "c"), (S, "d"), (Y, "}"), (Y, ")")]),
        ("a | b |> c ; d", [(S, "a"), (S, "|"), (S, "b"), (S, "|>"), (S, "c"), (S, ";"), (S, "d")]),
        ("a|b;c", [(S, "a"), (S, "|"), (S, "b"), (S, ";"), (S, "c")]),
        ("a\nb", [(S, "a"), (NL, "\n"), (S, "b")]),
        ("(a\nb)", [(Y, "("), (S, "a"), (S, "b"), (Y, ")")]),
        ("a # trailing comment\nb", [(S, "a"), (NL, "\n"), (S, "b")]),
        ("\n\n a \n\n b \n", [(S, "a"), (NL, "\n"), (S, "b")]),
        ("ls |\n  wc", [(S, "ls"), (S, "|"), (S, "wc")]),
        ("a ;\nb", [(S, "a"), (S, ";"), (S, "b")]),
        ("inf nan", [(S, "inf"), (S, "nan")]),
        ("./run.sh --fast", [(S, "./run.sh"), (S, "--fast")]),
    ]
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_lexer_quoted_strings():
    [double] = lex(r'"a\tb\"c\n"')
    assert double.kind is TokenKind.STRING
    assert double.quoted
    assert double.value == 'a\tb"c\n'

    [single] = lex(r"'no\escapes here'")
    assert single.quoted
    assert single.value == r"no\escapes here"

    # Quoting turns operators and literals into plain strings.
    tokens = lex('"|" "true" "12"')
    assert [(t.kind, t.value, t.quoted) for t in tokens] == [(S, "|", True), (S, "true", True), (S, "12", True)]


def test_lexer_locations():
    tokens = lex('(ls\n  -la "x")')
    assert [t.loc for t in tokens] == [
        Location(1, 1), Location(1, 2), Location(2, 3), Location(2, 7), Location(2, 10),
    ]


def test_lexer_unterminated_string():
    with pytest.raises(LishSyntaxError) as exc:
        lex('echo "abc')
    assert exc.value.loc == Location(1, 6)
    assert str(exc.value) == "Unterminated string at 1:6"


def test_lexer_keeps_number_spelling():
    tokens = lex("007 1.10 1e3 -2")
    assert [t.value for t in tokens] == [7, 1.1, 1000.0, -2]
    assert [t.raw for t in tokens] == ["007", "1.10", "1e3", "-2"]
    assert lex("abc")[0].raw is None


@given(st.integers())
def test_integers_lex_back_to_themselves(n):
    [token] = lex(str(n))
    assert token.kind is TokenKind.NUMBER
    assert token.value == n


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_floats_lex_back_to_themselves(x):
    [token] = lex(repr(x))
    assert token.kind is TokenKind.NUMBER
    assert token.value == x


@given(st.text())
def test_quoted_strings_lex_back_to_themselves(text):
    [token] = lex(quote_string(text))
    assert token.kind is TokenKind.STRING
    assert token.quoted
    assert token.value == text


# -----------------------------------------------------
# Parser
# -----------------------------------------------------

def word(text):
    return Expression.literal(text)


def num(n):
    return Expression.literal(n)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", Expression.call([word("+"), num(1), num(2)])),
        ("[1 $x]", Expression.array([num(1), Expression.variable("x")])),
        ('{"a" 1}', Expression.map([Expression.literal("a", quoted=True), num(1)])),
        ("ls", Expression.call([word("ls")])),
        ("ls -la", Expression.call([word("ls"), word("-la")])),
        ("42", num(42)),
        ('"ls"', Expression.literal("ls", quoted=True)),
        ("$x", Expression.variable("x")),
        ("(a) (b)", Expression.call([Expression.call([word("a")]), Expression.call([word("b")])])),
    ]
)
def test_parse(source, expected):
    assert parse(lex(source)) == expected


def test_parse_empty_program():
    assert parse(lex("")) is None
    assert parse(lex("  # only a comment\n")) is None


def test_parse_splits_lines_into_statements():
    assert parse(lex("a b\nc\n\n(d)")) == Expression.call([
        Expression.command("do"),
        Expression.call([word("a"), word("b")]),
        Expression.call([word("c")]),
        Expression.call([word("d")]),
    ])
    assert parse(lex("ls |\n  wc")) == Expression.call([word("ls"), word("|"), word("wc")])


def test_parse_keeps_locations():
    tree = parse(lex("(echo\n  $name)"))
    assert tree.loc == Location(1, 1)
    assert tree.body[1].loc == Location(2, 3)


def test_structural_equality_ignores_locations_but_not_quoting():
    assert word("a") == Expression.literal("a", loc=Location(3, 4))
    assert word("a") != Expression.literal("a", quoted=True)
    assert num(1) != Expression.literal(True)


@pytest.mark.parametrize(
    "source,message",
    [
        ("()", "Empty call form at 1:1"),
        ("(ls", "Unterminated form, expected ')' at 1:2"),
        ("[1 2", "Unterminated form, expected ']' at 1:4"),
        ("]", "Unexpected ']' at 1:1"),
        ("(a ]", "Unexpected ']' at 1:4"),
        ('{"a"}', "Map literal must have an even number of values to form key -> value pairs at 1:1"),
    ]
)
def test_parse_errors(source, message):
    with pytest.raises(LishSyntaxError) as exc:
        parse(lex(source))
    assert str(exc.value) == message


def test_expression_source_form():
    tree = parse(lex('(echo "a b" [1 2.5] {x $y} true)'))
    assert str(tree) == '(echo "a b" [1 2.5] {x $y} true)'
    assert str(parse(lex("(git checkout 007 1.10)"))) == "(git checkout 007 1.10)"

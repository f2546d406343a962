"""Test the tokenizer"""
import dataclasses

import pytest

from forth_lang.forth_parser import T_Number, T_String, T_Symbol, tokenize


def test_numbers():
    assert tokenize("3 15 -7 +2") == [T_Number(3), T_Number(15), T_Number(-7), T_Number(2)]


def test_words():
    expected = [T_Symbol(w) for w in ["+", "-", "*", "/", "CR", "."]]
    assert tokenize("+ - * / CR .") == expected


def test_casing_is_kept():
    (tok,) = tokenize("Dup")
    assert tok.name == "Dup"
    assert tok.key == "DUP"


def test_int16_bounds():
    assert tokenize("32767 -32768") == [T_Number(32767), T_Number(-32768)]


@pytest.mark.parametrize("text", ["32768", "-32769", "12abc", "1.5", "0x10", "1_000", "--1"])
def test_not_numbers(text):
    """Anything that isn't a 16-bit integer literal is a word"""
    assert tokenize(text) == [T_Symbol(text)]


@pytest.mark.parametrize(
    "source, text",
    [
        ('." hello world"', "hello world"),
        ('." hello      world!"', "hello      world!"),
        ('."  leading"', " leading"),
        ('." "', ""),
        ('." two\nlines"', "two\nlines"),
        (r'." say \"hi\""', 'say "hi"'),
    ],
)
def test_string_literal(source, text):
    assert tokenize(source) == [T_String(text)]


def test_adjacent_strings_merge():
    assert tokenize('." hello"\n." world"') == [T_String("hello world")]


def test_strings_split_by_a_word_stay_apart():
    assert tokenize('." hello" cr ." world"') == [
        T_String("hello"),
        T_Symbol("cr"),
        T_String("world"),
    ]


def test_string_between_words():
    assert tokenize('1 ." one" .') == [T_Number(1), T_String("one"), T_Symbol(".")]


def test_unterminated_string():
    """The whole input is discarded"""
    assert tokenize('1 2 + ." oops') == []
    assert tokenize('." oops\n') == []


def test_dot_quote_needs_a_space():
    assert tokenize('."hello"') == [T_Symbol('."hello"')]


@pytest.mark.parametrize("gap", ["\t", "\n"])
def test_dot_quote_lead_in_is_a_space(gap):
    assert tokenize(f'."{gap}hello"') == [T_Symbol('."'), T_Symbol('hello"')]


@pytest.mark.parametrize("source", ["", "   ", "\n\t \r\n"])
def test_blank(source):
    assert tokenize(source) == []


def test_whitespace_kinds():
    assert tokenize("1\t2\n3\r\n4") == [T_Number(n) for n in (1, 2, 3, 4)]


def test_line_numbers():
    toks = tokenize("1\n2 dup\n\n." + ' ." x"')
    assert [t.lineno for t in toks] == [1, 2, 2, 4, 4]


def test_line_numbers_ignored_in_equality():
    assert T_Number(1, lineno=3) == T_Number(1)


def test_tokens_are_immutable():
    (tok,) = tokenize("42")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tok.value = 43

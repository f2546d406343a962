"""Test compilation of word bodies"""
import pytest

from forth_lang.exceptions import InvalidWord, MalformedConditional
from forth_lang.forth_compiler import WordCompiler, find_branches, find_definition
from forth_lang.forth_parser import tokenize
from forth_lang.machine.dictionary import Dictionary
from forth_lang.machine.instructionset import *


def compile_body(source, dictionary=None):
    dictionary = dictionary if dictionary is not None else Dictionary()
    return WordCompiler(dictionary).compile_body(tokenize(source))


def define(compiler, source):
    definition, _ = compiler.compile_definition(tokenize(source), 0)
    return definition


def test_literals():
    assert compile_body('1 ." hi"') == (PushV(1), PrintS("hi"))


def test_builtins():
    assert compile_body("dup + Swap cr") == (Dup(), Plus(), Swap(), Cr())


def test_unknown_word():
    assert compile_body("foo") == (Unknown("foo"),)


def test_call_binds_current_definition():
    d = Dictionary()
    foo = d.define("FOO", [PushV(5)])
    (call,) = compile_body("foo", d)
    assert isinstance(call, Call)
    assert call.operands[0] is foo

    d.define("FOO", [PushV(6)])
    assert call.operands[0] is foo


def test_user_word_shadows_builtin():
    d = Dictionary()
    plus = d.define("+", [Multiply()])
    (call,) = compile_body("+", d)
    assert call.operands[0] is plus


@pytest.mark.parametrize(
    "source, expected",
    [
        ("if 1 else 2 then", (Branch((PushV(1),), (PushV(2),)),)),
        ("if 1 then", (Branch((PushV(1),), ()),)),
        ("if else then", (Branch((), ()),)),
        ("dup if drop then 3", (Dup(), Branch((Drop(),), ()), PushV(3))),
        (
            "if if 1 else 2 then else 3 then",
            (Branch((Branch((PushV(1),), (PushV(2),)),), (PushV(3),)),),
        ),
        (
            "if 1 else if 2 then then",
            (Branch((PushV(1),), (Branch((PushV(2),), ()),)),),
        ),
    ],
)
def test_conditional(source, expected):
    assert compile_body(source) == expected


@pytest.mark.parametrize("source", ["if", "if 1", "if 1 else 2", "if if 1 then"])
def test_missing_then(source):
    with pytest.raises(MalformedConditional):
        compile_body(source)


def test_nested_definition():
    with pytest.raises(InvalidWord):
        compile_body(": b 1")


def test_find_branches():
    toks = tokenize("IF 1 IF 2 THEN ELSE 3 THEN 4")
    assert find_branches(toks, 0) == (5, 7)
    assert find_branches(toks, 2) == (None, 4)


def test_find_branches_respects_end():
    toks = tokenize("IF 1 THEN")
    with pytest.raises(MalformedConditional):
        find_branches(toks, 0, 2)


def test_find_definition():
    assert find_definition(tokenize(": sq dup * ; 3 sq"), 0) == ("sq", 2, 4)


@pytest.mark.parametrize("source", [":", ": 1 2 ;", ": -1 2 ;", ": foo 1 2", ': ." x" ;'])
def test_bad_definition(source):
    with pytest.raises(InvalidWord):
        find_definition(tokenize(source), 0)


def test_compile_definition():
    d = Dictionary()
    compiler = WordCompiler(d)
    definition, next_i = compiler.compile_definition(tokenize(": sq dup * ; 3 sq"), 0)
    assert next_i == 5
    assert definition.name == "SQ"
    assert definition.code == (Dup(), Multiply())
    assert d.lookup("sq") is definition


def test_self_reference_uses_previous_definition():
    compiler = WordCompiler(Dictionary())
    first = define(compiler, ": foo 10 ;")
    second = define(compiler, ": foo foo 1 + ;")
    assert second.code == (Call(first), PushV(1), Plus())
    assert second.code[0].operands[0] is first


def test_self_reference_without_previous_definition():
    compiler = WordCompiler(Dictionary())
    definition = define(compiler, ": foo foo ;")
    assert definition.code == (Unknown("foo"),)


def test_bodies_are_shared():
    """Each level refers to the one below, so nothing is copied"""
    compiler = WordCompiler(Dictionary())
    prev = define(compiler, ": w0 1 ;")
    for n in range(1, 28):
        word = define(compiler, f": w{n} w{n - 1} w{n - 1} ;")
        assert len(word.code) == 2
        assert all(c.operands[0] is prev for c in word.code)
        prev = word


def test_deeply_nested_conditional():
    depth = 2000
    code = compile_body("IF " * depth + "1 " + "THEN " * depth)
    for _ in range(depth):
        (branch,) = code
        assert isinstance(branch, Branch)
        code, false_code = branch.operands
        assert false_code == ()
    assert code == (PushV(1),)


def test_second_else_is_a_word():
    assert compile_body("if 1 else 2 else then") == (
        Branch((PushV(1),), (PushV(2), Unknown("else"))),
    )

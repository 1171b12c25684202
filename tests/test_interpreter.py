## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from basicfl.objects import NumberObject, StringObject, ErrorObject
from basicfl.environment import StreamEnvironment
from basicfl.registry import Builtins
from basicfl.builtins import load_builtins
from basicfl.parser import parse
from basicfl.interpreter import call_builtin, check_arity, evaluate, interpret
from basicfl.errors import BasicNameError, BasicArityError, BasicRuntimeError


def test_unknown_builtin_raises_name_error():
    with pytest.raises(BasicNameError) as info:
        call_builtin(Builtins(), StreamEnvironment(), "NOPE", [])
    assert info.value.basic_token == "NOPE"


def test_registered_zero_arity_builtin_is_callable():
    b = Builtins()
    b.register("ZERO", 0, lambda env, args: NumberObject(0.0))
    assert call_builtin(b, StreamEnvironment(), "ZERO", []) == NumberObject(0.0)


def test_arity_mismatch_is_detected_before_invoking():
    calls = []
    b = Builtins()
    b.register("ONE", 1, lambda env, args: calls.append(args) or NumberObject(1.0))

    with pytest.raises(BasicArityError) as info:
        call_builtin(b, StreamEnvironment(), "ONE", [NumberObject(1.0), NumberObject(2.0)])
    assert (info.value.expected, info.value.supplied) == (1, 2)
    assert calls == []


def test_negative_arity_accepts_any_count():
    check_arity("PRINT", -1, 0)
    check_arity("PRINT", -1, 5)
    with pytest.raises(BasicArityError):
        check_arity("SIN", 1, 0)


def test_error_object_is_propagated_as_exception():
    b = Builtins()
    b.register("FAIL", 0, lambda env, args: ErrorObject("went wrong"))
    with pytest.raises(BasicRuntimeError, match="went wrong") as info:
        call_builtin(b, StreamEnvironment(), "FAIL", [])
    assert info.value.basic_token == "FAIL"


def test_evaluate_nested_calls_left_to_right():
    order = []
    b = load_builtins()
    def tag(env, args):
        order.append(args[0].value)
        return args[0]
    b.register("TAG", 1, tag)

    [node] = parse('LEFT$(TAG("abc"), TAG(2))')
    assert evaluate(node, b, StreamEnvironment()) == StringObject("ab")
    assert order == ["abc", 2.0]


def test_interpret_returns_last_value_and_counts_expressions():
    out = io.StringIO()
    stats = {}
    result = interpret(parse('PRINT("A") : SQR(9)'), load_builtins(), StreamEnvironment(output=out), stats=stats)
    assert result == NumberObject(3.0)
    assert out.getvalue() == "A\n"
    assert stats['expressions'] == 2


def test_interpret_empty_program_returns_none():
    assert interpret([], Builtins(), StreamEnvironment()) is None


def test_error_carries_source_position():
    with pytest.raises(BasicNameError) as info:
        interpret(parse('SIN(0)\n  NOPE(1)', filename='<t>'), load_builtins(), StreamEnvironment())
    assert info.value.basic_meta == {'filename': '<t>', 'line': 2, 'column': 3}

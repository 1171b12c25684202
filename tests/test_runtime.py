## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from basicfl.runtime import Runtime
from basicfl.registry import Builtins
from basicfl.environment import Environment
from basicfl.objects import NumberObject, StringObject, ErrorObject
from basicfl.errors import BasicNameError, BasicRuntimeError, BasicTypeMissing


def test_runtime_loads_standard_builtins():
    rt = Runtime()
    assert rt.call('SIN', 0) == NumberObject(0.0)
    assert rt.run('LEFT$("hello", 2)') == StringObject("he")


def test_runtime_with_explicit_registry_does_not_load_standard_builtins():
    b = Builtins()
    rt = Runtime(b)
    assert rt.builtins is b
    assert rt.get('SIN') == (0, None)


def test_runtimes_are_independent():
    first, second = Runtime(), Runtime()
    first.register('ANSWER', 0, lambda env, args: NumberObject(42.0))

    assert first.run('ANSWER') == NumberObject(42.0)
    with pytest.raises(BasicNameError):
        second.run('ANSWER')


def test_register_raw_signature_receives_runtime_as_environment():
    seen = []
    rt = Runtime()
    def raw(env, args):
        seen.append(env)
        return StringObject(env.line_ending())
    rt.register('ENDING', 0, raw)

    assert rt.run('ENDING') == StringObject("\n")
    assert seen == [rt]


def test_register_function_with_annotations():
    rt = Runtime()
    def fn_hyp(a: float, b: float) -> float: return (a * a + b * b) ** 0.5
    meta = rt.register_function('HYP', fn_hyp)

    assert meta['arity'] == 2
    assert rt.run('HYP(3, 4)') == NumberObject(5.0)
    assert rt.get_signature('HYP')['inputs'] == [float, float]


def test_register_function_without_annotations_fails():
    rt = Runtime()
    def quadruple(x): return x * 4
    with pytest.raises(BasicTypeMissing):
        rt.register_function('QUADRUPLE', quadruple)


def test_overriding_a_standard_builtin_for_stubbing():
    rt = Runtime()
    rt.register('RND', 1, lambda env, args: NumberObject(4.0))
    assert rt.run('RND(6)') == NumberObject(4.0)


def test_print_uses_configured_streams_and_line_ending():
    out = io.StringIO()
    rt = Runtime(stdout=out, line_ending="\r\n")
    rt.run('PRINT("A", 1) : PRINT("B")')
    assert out.getvalue() == "A1\r\nB\r\n"


def test_print_defaults_to_current_stdout(capsys):
    Runtime().run('PRINT("captured")')
    assert capsys.readouterr().out == "captured\n"


def test_builtin_reading_stdin():
    rt = Runtime(stdin=io.StringIO("Ada\n"))
    def fn_input_s(env: Environment) -> str: return env.stdin().readline().rstrip("\n")
    rt.register_function('INPUT$', fn_input_s)
    assert rt.run('INPUT$') == StringObject("Ada")


def test_builtin_writing_stderr():
    err, out = io.StringIO(), io.StringIO()
    rt = Runtime(stdout=out, stderr=err)
    def fn_warn(env: Environment, s: str) -> None: env.stderr().write(s)
    rt.register_function('WARN', fn_warn)
    rt.run('WARN("careful")')
    assert err.getvalue() == "careful" and out.getvalue() == ""


def test_runtime_error_from_builtin():
    rt = Runtime()
    with pytest.raises(BasicRuntimeError, match="SQR"):
        rt.run('SQR(-1)')


def test_introspection():
    rt = Runtime()
    listing = rt.list_builtins()
    assert listing['PRINT'] == -1 and listing['MID$'] == 3
    assert list(listing) == sorted(listing)
    assert rt.get_signature('NOPE') is None

    rt.register('RAW', 2, lambda env, args: ErrorObject("raw"))
    assert rt.get_signature('RAW') == {'arity': 2}


def test_run_for_display_hides_result_of_builtins_returning_nothing():
    out = io.StringIO()
    rt = Runtime(stdout=out)
    assert rt.run_for_display('PRINT("HI")') is None
    assert rt.run('PRINT("HI")') == NumberObject(0.0)
    assert rt.run_for_display('PRINT("HI") : SQR(4)') == NumberObject(2.0)
    assert rt.run_for_display('SQR(4) : PRINT("HI")') is None
    assert out.getvalue() == "HI\nHI\nHI\nHI\n"


def test_returns_value_reads_declared_output():
    rt = Runtime()
    rt.register('RAW', 0, lambda env, args: NumberObject(1.0))
    assert rt.returns_value('SIN') and rt.returns_value('RAW')
    assert not rt.returns_value('PRINT')

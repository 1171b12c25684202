## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
import pytest

from basicfl.runtime import Runtime
from basicfl.environment import StreamEnvironment
from basicfl.objects import NumberObject, StringObject
from basicfl.errors import BasicModuleError, BasicRuntimeError


def test_mem_extension_peek_and_poke():
    rt = Runtime()
    assert sorted(rt.load_extension('mem')) == ['PEEK', 'POKE']

    assert rt.run('PEEK(10)') == NumberObject(0.0)
    rt.run('POKE(10, 42)')
    assert rt.run('PEEK(10)') == NumberObject(42.0)
    assert rt.memory == {10: 42.0}
    assert 'mem' in rt.extensions


def test_mem_extension_state_is_per_runtime():
    first, second = Runtime(), Runtime()
    first.load_extension('mem')
    second.load_extension('mem')

    first.run('POKE(1, 7)')
    assert second.run('PEEK(1)') == NumberObject(0.0)


def test_mem_extension_rejects_foreign_host_by_value():
    rt = Runtime()
    rt.load_extension('mem')
    _, peek = rt.get('PEEK')

    result = peek(StreamEnvironment(state={'not': 'a runtime'}), [NumberObject(1.0)])
    assert result.is_error()
    assert "expected Runtime" in result.value


def test_mem_extension_negative_address():
    rt = Runtime()
    rt.load_extension('mem')
    with pytest.raises(BasicRuntimeError, match="negative address"):
        rt.run('POKE(-1, 3)')


def test_env_extension_reads_environment(monkeypatch):
    monkeypatch.setenv('BASICFL_GREETING', 'hello')
    rt = Runtime()
    rt.load_extension('env')
    assert rt.run('GETENV$("BASICFL_GREETING")') == StringObject('hello')
    assert rt.run('GETENV$("BASICFL_SURELY_UNSET")') == StringObject('')


def test_extension_from_basic_path(tmp_path, monkeypatch):
    (tmp_path / "dice.py").write_text(
        "from basicfl.environment import Environment\n"
        "def fn_roll(env: Environment, sides: int) -> int:\n"
        "    return sides\n"
        "__functions__ = [fn_roll]\n", encoding="utf-8")
    monkeypatch.setenv("BASIC_PATH", str(tmp_path))

    rt = Runtime()
    assert rt.load_extension('dice') == ['ROLL']
    assert rt.run('ROLL(6)') == NumberObject(6.0)


def test_missing_extension():
    with pytest.raises(BasicModuleError, match="not found"):
        Runtime().load_extension('surely_missing_extension')

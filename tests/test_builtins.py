import errno
import io
import os

import pytest

from minishell.builtins import (
    cd_builtin,
    echo_builtin,
    env_builtin,
    exit_builtin,
    export_builtin,
    export_print_builtin,
    is_builtin,
    pwd_builtin,
    run_builtin,
    unset_builtin,
)
from minishell.parser import Call
from minishell.state import ShellState
from minishell.variables import Variables


def _run(function, state, *argv):
    out, err = io.StringIO(), io.StringIO()
    status = function(state, Call(list(argv)), out, err)
    return status, out.getvalue(), err.getvalue()


@pytest.fixture
def state():
    return ShellState(variables=Variables.from_envp(["FOO=bar", "HOME=/"]))


@pytest.mark.parametrize("name", ["cd", "exit", "export", "env", "pwd", "echo", "unset"])
def test_is_builtin_names(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "ech", "echoo", "", "CD"])
def test_is_builtin_rejects_others(name):
    assert is_builtin(name) is False


def test_echo_joins_arguments(state):
    assert _run(echo_builtin, state, "echo", "a", "b") == (0, "a b\n", "")


def test_echo_dash_n(state):
    assert _run(echo_builtin, state, "echo", "-n", "x") == (0, "x", "")


def test_echo_no_arguments(state):
    assert _run(echo_builtin, state, "echo") == (0, "\n", "")


def test_exit_uses_last_status(state):
    state.status = 7
    status, _, _ = _run(exit_builtin, state, "exit")
    assert status == 7
    assert state.exit is True


def test_exit_with_argument(state):
    status, _, _ = _run(exit_builtin, state, "exit", "42")
    assert status == 42
    assert state.exit is True


def test_exit_non_numeric(state):
    status, _, err = _run(exit_builtin, state, "exit", "abc")
    assert status == 1
    assert err == "exit: numeric argument required\n"
    assert state.exit is False


def test_exit_too_many_arguments(state):
    status, _, err = _run(exit_builtin, state, "exit", "1", "2")
    assert (status, err) == (1, "exit: too many arguments\n")
    assert state.exit is False


def test_export_assigns_and_exports(state):
    status, _, _ = _run(export_builtin, state, "export", "NEW=value")
    assert status == 0
    assert "NEW=value" in state.variables.envp()


def test_export_existing_name(state):
    state.variables.set("LOCAL", "x")
    assert "LOCAL=x" not in state.variables.envp()
    _run(export_builtin, state, "export", "LOCAL")
    assert "LOCAL=x" in state.variables.envp()


def test_export_bad_name(state):
    status, _, err = _run(export_builtin, state, "export", "BAD-NAME", "OK=1")
    assert status == 1
    assert err == "builtin: bad variable name\n"
    assert "OK=1" in state.variables.envp()


def test_export_print_format(state):
    status, out, _ = _run(export_print_builtin, state, "export")
    assert status == 0
    assert out.splitlines() == ['declare -x FOO="bar"', 'declare -x HOME="/"']


def test_run_builtin_export_without_arguments_prints(state):
    status, out, _ = _run(run_builtin, state, "export")
    assert status == 0
    assert 'declare -x FOO="bar"' in out.splitlines()


def test_env_lists_exported(state):
    status, out, _ = _run(env_builtin, state, "env")
    assert status == 0
    assert out.splitlines() == state.variables.envp()


def test_env_too_many_arguments(state):
    assert _run(env_builtin, state, "env", "x") == (1, "", "too many arguments\n")


def test_unset_removes(state):
    _run(unset_builtin, state, "unset", "FOO")
    assert all(not entry.startswith("FOO=") for entry in state.variables.envp())
    assert state.variables.get("FOO") == ""


def test_pwd_prints_cwd(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    status, out, _ = _run(pwd_builtin, state, "pwd")
    assert status == 0
    assert out == os.getcwd() + "\n"


def test_cd_updates_pwd_and_oldpwd(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state.variables.set("PWD", os.getcwd())
    before = os.getcwd()
    sub = tmp_path / "sub"
    sub.mkdir()
    status, _, _ = _run(cd_builtin, state, "cd", str(sub))
    assert status == 0
    assert os.getcwd() == os.path.realpath(sub)
    assert state.variables.get("PWD") == os.getcwd()
    assert state.variables.get("OLDPWD") == before


def test_cd_dash_goes_back_and_prints(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state.variables.set("PWD", os.getcwd())
    start = os.getcwd()
    sub = tmp_path / "d"
    sub.mkdir()
    _run(cd_builtin, state, "cd", str(sub))
    status, out, _ = _run(cd_builtin, state, "cd", "-")
    assert status == 0
    assert os.getcwd() == start
    assert out == start + "\n"


def test_cd_home(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state.variables.set("HOME", str(tmp_path / "h"))
    (tmp_path / "h").mkdir()
    status, _, _ = _run(cd_builtin, state, "cd")
    assert status == 0
    assert os.getcwd() == os.path.realpath(tmp_path / "h")


def test_cd_missing_directory(state, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    status, _, err = _run(cd_builtin, state, "cd", str(tmp_path / "missing"))
    assert status == errno.ENOENT
    assert err.startswith("cd: ")


def test_cd_too_many_arguments(state):
    assert _run(cd_builtin, state, "cd", "a", "b") == (1, "", "cd: too many arguments\n")


def test_run_builtin_unknown(state):
    assert _run(run_builtin, state, "nope")[0] == 1


def test_run_builtin_dispatches_echo(state):
    assert _run(run_builtin, state, "echo", "hi") == (0, "hi\n", "")
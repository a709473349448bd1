import pytest

from zaplog.exit import exit_process, stub, with_stub


@pytest.mark.parametrize(
    "func, want",
    [
        (exit_process, True),
        (lambda: None, False),
    ],
)
def test_stub(func, want):
    s = with_stub(func)
    assert s.exited is want


def test_unstubbed_exit_raises_system_exit():
    with pytest.raises(SystemExit) as info:
        exit_process()
    assert info.value.code == 1


def test_unstub_restores_previous():
    outer = stub()
    inner = stub()
    exit_process()
    assert inner.exited is True
    assert outer.exited is False
    inner.unstub()
    exit_process()
    assert outer.exited is True
    outer.unstub()
    with pytest.raises(SystemExit):
        exit_process()


def test_stub_as_context_manager():
    with stub() as s:
        exit_process()
    assert s.exited is True
    with pytest.raises(SystemExit):
        exit_process()
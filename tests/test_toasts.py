from __future__ import annotations

from conftest import FakeClock

from jobscout.models import ToastType
from jobscout.toasts import ToastChannel


def test_ids_are_monotonic_when_clock_stalls() -> None:
    channel = ToastChannel(clock=FakeClock(), id_clock=lambda: 1.0)
    ids = [channel.show(f"t{i}").id for i in range(3)]
    assert ids == [1000, 1001, 1002]


def test_toasts_expire_lazily() -> None:
    clock = FakeClock(100.0)
    channel = ToastChannel(ttl=5.0, clock=clock)
    first = channel.show("first", ToastType.SUCCESS)
    clock.now = 103.0
    channel.show("second", ToastType.ERROR)

    assert [t.message for t in channel.active()] == ["first", "second"]
    clock.now = 105.5
    assert [t.id for t in channel.active() if t.id == first.id] == []
    assert [t.message for t in channel.active()] == ["second"]
    clock.now = 200.0
    assert channel.active() == []


def test_dismiss_and_clear() -> None:
    channel = ToastChannel(clock=FakeClock())
    a = channel.show("a")
    channel.show("b")
    assert channel.dismiss(a.id) is True
    assert channel.dismiss(a.id) is False
    assert [t.message for t in channel.active()] == ["b"]
    channel.clear()
    assert channel.active() == []


def test_type_accepts_plain_string() -> None:
    channel = ToastChannel(clock=FakeClock())
    assert channel.show("x", "error").type is ToastType.ERROR

from src.todo_highlight.cooldown import CooldownGate
import time


def test_cooldown_gate_basic():
    cd = CooldownGate(seconds=0.1)
    assert cd.should_report("first") is True
    assert cd.in_cooldown() is True
    assert cd.last_error == "first"

    assert cd.should_report("again") is False
    assert cd.suppressed == 1
    assert cd.last_error == "again"

    time.sleep(0.12)
    assert cd.in_cooldown() is False
    assert cd.should_report("later") is True
    assert cd.suppressed == 0


def test_cooldown_gate_explicit_clock():
    cd = CooldownGate(seconds=5)
    assert cd.should_report("a", now=100.0) is True
    assert cd.should_report("b", now=104.9) is False
    assert cd.should_report("c", now=105.0) is True


def test_cooldown_gate_multiple_trips_extend_window():
    cd = CooldownGate(seconds=0.05)
    cd.trip(message="first")
    time.sleep(0.02)
    cd.trip(message="second")
    assert cd.last_error == "second"
    assert cd.in_cooldown() is True

    time.sleep(0.06)
    assert cd.in_cooldown() is False


def test_cooldown_gate_reset():
    cd = CooldownGate(seconds=60)
    cd.should_report("x")
    cd.should_report("y")
    cd.reset()
    assert cd.in_cooldown() is False
    assert cd.suppressed == 0

"""Tests for the composition reducer (event replay, no Qt)."""

import random

import pytest

from soiltexture.config import DEFAULT_COMPOSITION
from soiltexture.controller import events as ev
from soiltexture.controller.reducer import ControllerState, apply, parse_percent, replay
from soiltexture.model import geometry
from soiltexture.model.classifier import TextureClass
from soiltexture.model.composition import Axis, Composition
from soiltexture.model.regions import centroid_of

from conftest import CENTER, SIZE, assert_sums_to_one


def _screen(composition: Composition) -> tuple[float, float]:
    x, y = geometry.forward(composition, CENTER, SIZE)
    return float(x), float(y)


def test_default_state():
    state = ControllerState()
    assert state.composition.as_tuple() == DEFAULT_COMPOSITION
    assert state.locks == frozenset()
    assert state.inputs == ("30", "40", "30")
    assert not state.dragging


def test_unknown_event_type(state):
    with pytest.raises(TypeError):
        apply(object(), state)  # type: ignore[arg-type]


# ---- pointer ----

def test_pointer_down_moves_dot_and_starts_drag(state):
    target = Composition(0.20, 0.30, 0.50)
    new = apply(ev.PointerDown(*_screen(target)), state)
    assert new.dragging
    assert new.composition.as_tuple() == pytest.approx(target.as_tuple(), abs=1e-9)
    assert new.inputs == ("20", "30", "50")


def test_pointer_move_requires_drag(state):
    assert apply(ev.PointerMove(*_screen(Composition(0.1, 0.1, 0.8))), state) is state


def test_drag_sequence(state):
    target = Composition(0.10, 0.10, 0.80)
    new = replay([
        ev.PointerDown(*_screen(Composition(0.2, 0.2, 0.6))),
        ev.PointerMove(*_screen(target)),
        ev.PointerUp(),
        ev.PointerMove(*_screen(Composition(0.5, 0.4, 0.1))),
    ], state)
    assert not new.dragging
    assert new.composition.as_tuple() == pytest.approx(target.as_tuple(), abs=1e-9)


def test_pointer_leave_ends_drag(state):
    dragging = apply(ev.PointerDown(*_screen(Composition(0.2, 0.2, 0.6))), state)
    assert not apply(ev.PointerLeave(), dragging).dragging


def test_pointer_outside_triangle_is_ignored_but_starts_drag(state):
    top, _, _ = geometry.triangle_vertices(CENTER, SIZE)
    new = apply(ev.PointerDown(float(top[0]), float(top[1]) - 40.0), state)
    assert new.composition == state.composition
    assert new.dragging


@pytest.mark.parametrize("edge", [
    lambda f: Composition(f, 0.0, 1.0 - f),
    lambda f: Composition(f, 1.0 - f, 0.0),
    lambda f: Composition(0.0, f, 1.0 - f),
], ids=["left", "right", "bottom"])
def test_pointer_on_edge_is_committed(state, edge):
    for k in range(101):
        target = edge(k / 100)
        new = apply(ev.PointerDown(*_screen(target)), state)
        assert new.composition.as_tuple() == pytest.approx(target.as_tuple(), abs=1e-9), k
        assert min(new.composition) >= 0.0


def test_pointer_with_one_lock_keeps_locked_value(state):
    locked = apply(ev.LockToggle(Axis.CLAY), state)
    new = replay([ev.PointerDown(*_screen(Composition(0.60, 0.10, 0.30)))], locked)
    assert new.composition.clay == pytest.approx(0.30)
    assert new.composition.sand / new.composition.silt == pytest.approx(3.0)
    assert_sums_to_one(new.composition)


def test_pointer_with_two_locks_is_ignored(state):
    locked = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.SILT)], state)
    new = apply(ev.PointerDown(*_screen(Composition(0.1, 0.1, 0.8))), locked)
    assert new.composition == locked.composition


# ---- sliders / numeric input ----

def test_slider_change(state):
    new = apply(ev.SliderChange(Axis.SAND, 60), state)
    assert new.composition.sand == pytest.approx(0.60)
    assert new.composition.clay / new.composition.silt == pytest.approx(0.75)
    assert new.inputs[Axis.SAND] == "60"


def test_lock_and_slide_scenario(state):
    locked = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.SILT)], state)
    assert not locked.is_editable(Axis.SAND)
    assert apply(ev.SliderChange(Axis.SAND, 80), locked) is locked
    assert apply(ev.SliderChange(Axis.CLAY, 80), locked) is locked


def test_numeric_input_is_staged_only(state):
    new = apply(ev.NumericInput(Axis.CLAY, "4"), state)
    assert new.inputs == ("4", "40", "30")
    assert new.composition == state.composition


def test_numeric_commit_applies_value(state):
    new = replay([ev.NumericInput(Axis.CLAY, "45.6"), ev.NumericCommit(Axis.CLAY)], state)
    assert new.composition.clay == pytest.approx(0.456)
    assert new.inputs[Axis.CLAY] == "46"
    assert_sums_to_one(new.composition)


@pytest.mark.parametrize("text, expected", [
    ("abc", 0.0), ("", 0.0), ("nan", 0.0), ("-5", 0.0), ("250", 1.0), ("12%", 0.12), (" 7 ", 0.07),
    ("50abc", 0.50), ("33.4 %", 0.334), ("1e1x", 0.10), ("abc50", 0.0),
])
def test_numeric_commit_parsing(state, text, expected):
    new = replay([ev.NumericInput(Axis.SILT, text), ev.NumericCommit(Axis.SILT)], state)
    assert new.composition.silt == pytest.approx(expected)
    assert new.inputs[Axis.SILT] == str(int(round(expected * 100)))


def test_numeric_commit_on_locked_axis_restores_text(state):
    new = replay([
        ev.LockToggle(Axis.SILT),
        ev.NumericInput(Axis.SILT, "90"),
        ev.NumericCommit(Axis.SILT),
    ], state)
    assert new.composition == state.composition
    assert new.inputs == ("30", "40", "30")


def test_parse_percent():
    assert parse_percent("inf") == 100.0
    assert parse_percent("1e3") == 100.0
    assert parse_percent("33.3") == pytest.approx(33.3)
    assert parse_percent("50abc") == 50.0
    assert parse_percent(".5") == 0.5
    assert parse_percent("+8e") == 8.0


# ---- locks ----

def test_third_lock_is_refused(state):
    two = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.SILT)], state)
    assert apply(ev.LockToggle(Axis.SAND), two) is two
    assert two.locks == {Axis.CLAY, Axis.SILT}


def test_unlock(state):
    new = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.CLAY)], state)
    assert new.locks == frozenset()


def test_second_lock_recomputes_free_axis():
    start = ControllerState(composition=Composition(0.25, 0.35, 0.40), center=CENTER, size=SIZE)
    new = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.SAND)], start)
    assert new.composition.silt == pytest.approx(max(0.0, 1.0 - 0.25 - 0.40))


# ---- legend / surface ----

def test_legend_jump_ignores_locks(state):
    locked = replay([ev.LockToggle(Axis.CLAY), ev.LockToggle(Axis.SILT)], state)
    new = apply(ev.LegendSelect(TextureClass.SAND), locked)
    assert new.composition == centroid_of(TextureClass.SAND)
    assert new.texture_class is TextureClass.SAND
    assert new.locks == locked.locks


def test_resize_changes_pointer_mapping(state):
    resized = apply(ev.Resize((100.0, 100.0), 200.0), state)
    x, y = geometry.forward(Composition(0.5, 0.25, 0.25), (100.0, 100.0), 200.0)
    new = apply(ev.PointerDown(float(x), float(y)), resized)
    assert new.composition.as_tuple() == pytest.approx((0.5, 0.25, 0.25))


def test_degenerate_resize_is_ignored(state):
    assert apply(ev.Resize((0.0, 0.0), 0.0), state) is state


def test_reset_restores_defaults_and_keeps_placement(state):
    changed = replay([ev.LockToggle(Axis.CLAY), ev.SliderChange(Axis.SAND, 70), ev.Resize((50.0, 50.0), 90.0)], state)
    new = apply(ev.Reset(), changed)
    assert new.composition.as_tuple() == DEFAULT_COMPOSITION
    assert new.locks == frozenset()
    assert (new.center, new.size) == ((50.0, 50.0), 90.0)


# ---- invariants over random event streams ----

def _random_event(rng: random.Random):
    axis = rng.choice(list(Axis))
    x = rng.uniform(CENTER[0] - SIZE, CENTER[0] + SIZE)
    y = rng.uniform(CENTER[1] - SIZE, CENTER[1] + SIZE)
    return rng.choice([
        ev.PointerDown(x, y),
        ev.PointerMove(x, y),
        ev.PointerUp(),
        ev.SliderChange(axis, rng.randint(0, 100)),
        ev.NumericInput(axis, rng.choice(["12", "x", "99", "-3", "55.5"])),
        ev.NumericCommit(axis),
        ev.LockToggle(axis),
        ev.LegendSelect(rng.choice(list(TextureClass))),
    ])


def test_random_event_streams_keep_invariants(state):
    rng = random.Random(1234)
    current = state
    for _ in range(2000):
        current = apply(_random_event(rng), current)
        assert_sums_to_one(current.composition)
        assert all(0.0 <= v <= 1.0 for v in current.composition)
        assert len(current.locks) <= 2
        if len(current.locks) == 2:
            (free,) = set(Axis) - current.locks
            locked_sum = sum(current.composition[a] for a in current.locks)
            assert current.composition[free] == pytest.approx(max(0.0, 1.0 - locked_sum), abs=1e-9)

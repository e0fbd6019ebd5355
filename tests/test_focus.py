import pytest

from textfield_sim.controls.container import Window
from textfield_sim.controls.events import ControlEvent
from textfield_sim.controls.text_field import TextField
from textfield_sim.errors import NotEnabled, NotFocused, NotInContainer, NotVisible, NoUserInteraction
from textfield_sim.runtime.focus import get_focus_arbiter

FOCUS_GAINED = [
    ControlEvent.TOUCH_DOWN,
    ControlEvent.ALL_TOUCH_EVENTS,
    ControlEvent.EDITING_DID_BEGIN,
    ControlEvent.ALL_EDITING_EVENTS,
]
FOCUS_LOST = [ControlEvent.EDITING_DID_END, ControlEvent.ALL_EDITING_EVENTS]


def test_acquire_focuses_field_and_sends_events(make_field):
    subject, delegate, recorder = make_field()

    get_focus_arbiter().acquire(subject)

    assert subject.is_focused is True
    assert get_focus_arbiter().focused is subject
    assert recorder.recorded_events == FOCUS_GAINED
    assert delegate.call_names() == ["should_begin_editing", "did_begin_editing"]


def test_acquire_when_begin_denied_still_sends_touch_events(make_field):
    subject, delegate, recorder = make_field()
    delegate.should_allow_begin_editing = False

    get_focus_arbiter().acquire(subject)

    assert subject.is_focused is False
    assert recorder.recorded_events == [ControlEvent.TOUCH_DOWN, ControlEvent.ALL_TOUCH_EVENTS]
    assert delegate.did_call_should_begin_editing is True
    assert delegate.did_call_did_begin_editing is False
    assert delegate.did_call_should_clear is False


def test_acquire_when_already_focused_does_nothing(make_field):
    subject, delegate, recorder = make_field()
    get_focus_arbiter().acquire(subject)
    delegate.reset_state()
    recorder.erase()

    get_focus_arbiter().acquire(subject)

    assert delegate.calls == []
    assert recorder.recorded_events == []
    assert subject.is_focused is True


def test_acquire_transfers_focus_between_fields(make_field):
    first, first_delegate, first_recorder = make_field("first")
    second, second_delegate, second_recorder = make_field("second")
    arbiter = get_focus_arbiter()
    arbiter.acquire(first)
    first_recorder.erase()

    seen_focused = []
    first.add_observer(lambda *_: seen_focused.append((first.is_focused, second.is_focused)))
    second.add_observer(lambda *_: seen_focused.append((first.is_focused, second.is_focused)))

    arbiter.acquire(second)

    assert first_recorder.recorded_events == FOCUS_LOST
    assert second_recorder.recorded_events == FOCUS_GAINED
    assert first_delegate.did_call_should_end_editing is True
    assert first_delegate.did_call_did_end_editing is True
    assert second_delegate.did_call_did_begin_editing is True
    assert arbiter.focused is second
    assert all(not (a and b) for a, b in seen_focused)


def test_acquire_aborts_when_focused_field_refuses_to_end(make_field):
    first, first_delegate, first_recorder = make_field("first")
    second, second_delegate, second_recorder = make_field("second")
    arbiter = get_focus_arbiter()
    arbiter.acquire(first)
    first_recorder.erase()
    first_delegate.should_allow_end_editing = False

    arbiter.acquire(second)

    assert arbiter.focused is first
    assert first_recorder.recorded_events == []
    assert second_recorder.recorded_events == []
    assert second_delegate.calls == []


def test_acquire_clears_text_on_focus_without_events(make_field):
    subject, delegate, recorder = make_field(text="turtle magic", clears_on_focus=True)

    get_focus_arbiter().acquire(subject)

    assert subject.text == ""
    assert recorder.recorded_events == FOCUS_GAINED
    assert delegate.call_names() == ["should_begin_editing", "did_begin_editing", "should_clear"]


def test_acquire_keeps_text_when_delegate_refuses_clear_on_focus(make_field):
    subject, delegate, _ = make_field(text="turtle magic", clears_on_focus=True)
    delegate.should_allow_clear = False

    get_focus_arbiter().acquire(subject)

    assert subject.text == "turtle magic"
    assert delegate.did_call_should_clear is True


@pytest.mark.parametrize(
    "attribute, error",
    [
        ("is_visible", NotVisible),
        ("is_enabled", NotEnabled),
        ("user_interaction_enabled", NoUserInteraction),
    ],
)
def test_acquire_rejects_unavailable_field_before_consulting_delegate(make_field, attribute, error):
    subject, delegate, recorder = make_field()
    setattr(subject, attribute, False)

    with pytest.raises(error):
        get_focus_arbiter().acquire(subject)

    assert subject.is_focused is False
    assert delegate.calls == []
    assert recorder.recorded_events == []


def test_acquire_checks_visibility_before_enabled(make_field):
    subject, _, _ = make_field(is_visible=False, is_enabled=False)

    with pytest.raises(NotVisible) as exc:
        get_focus_arbiter().acquire(subject)

    assert exc.value.code == 2001


def test_acquire_outside_container_raises():
    loose = TextField(name="loose")

    with pytest.raises(NotInContainer) as exc:
        get_focus_arbiter().acquire(loose)

    assert exc.value.code == 2004
    assert loose.is_focused is False


def test_release_unfocuses_and_sends_events(make_field):
    subject, delegate, recorder = make_field()
    arbiter = get_focus_arbiter()
    arbiter.acquire(subject)
    recorder.erase()

    arbiter.release(subject)

    assert subject.is_focused is False
    assert recorder.recorded_events == FOCUS_LOST
    assert delegate.did_call_did_end_editing is True


def test_release_when_delegate_refuses_keeps_focus_without_error(make_field):
    subject, delegate, recorder = make_field()
    arbiter = get_focus_arbiter()
    arbiter.acquire(subject)
    recorder.erase()
    delegate.should_allow_end_editing = False

    arbiter.release(subject)

    assert subject.is_focused is True
    assert recorder.recorded_events == []
    assert delegate.did_call_did_end_editing is False


def test_release_when_not_focused_raises(make_field):
    subject, _, _ = make_field()

    with pytest.raises(NotFocused):
        get_focus_arbiter().release(subject)


def test_removing_focused_field_from_window_drops_focus(make_field, window):
    subject, _, recorder = make_field()
    get_focus_arbiter().acquire(subject)
    recorder.erase()

    window.remove(subject)

    assert subject.is_focused is False
    assert subject.is_attached is False
    assert recorder.recorded_events == []


def test_fields_in_separate_windows_share_one_focus(make_field):
    first, _, _ = make_field("first")
    other_window = Window(title="other")
    second = other_window.embed(TextField(name="second"))
    arbiter = get_focus_arbiter()

    arbiter.acquire(first)
    arbiter.acquire(second)

    assert [f.is_focused for f in (first, second)] == [False, True]
    assert arbiter.focused is second
    with pytest.raises(TypeError):
        TextField(name="private", arbiter=arbiter)

import pytest

from textfield_sim.controls.container import Window
from textfield_sim.controls.delegate import RecordingTextFieldDelegate
from textfield_sim.controls.text_field import TextField
from textfield_sim.recorder.control_events import ControlEventRecorder
from textfield_sim.runtime.focus import reset_focus_arbiter
from textfield_sim.runtime.session import reset_session


@pytest.fixture(autouse=True)
def reset_focus():
    reset_focus_arbiter()
    yield
    reset_session()


@pytest.fixture
def window():
    main = Window()
    yield main
    main.close()


@pytest.fixture
def make_field(window):
    """Build an embedded field with a recording delegate and recorder.

    Returns (field, delegate, recorder); the test must hold on to the delegate.
    """

    def build(name="subject", **kwargs):
        text_field = TextField(name=name, **kwargs)
        delegate = RecordingTextFieldDelegate()
        text_field.delegate = delegate
        recorder = ControlEventRecorder()
        recorder.register_all_events(text_field)
        window.embed(text_field)
        return text_field, delegate, recorder

    return build

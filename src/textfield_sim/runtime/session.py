from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from textfield_sim.actions.interaction import InteractionFacade
from textfield_sim.controls.container import Window
from textfield_sim.controls.delegate import RecordingTextFieldDelegate
from textfield_sim.controls.text_field import TextField
from textfield_sim.recorder.control_events import ControlEventRecorder
from textfield_sim.runtime.focus import get_focus_arbiter


@dataclass
class SimulationSession:
    """Fields driven by the scripting server.

    Fields only hold their delegates weakly; ``delegates`` keeps them alive.
    """

    window: Window = field(default_factory=Window)
    facade: InteractionFacade = field(default_factory=InteractionFacade)
    recorder: ControlEventRecorder = field(default_factory=ControlEventRecorder)
    fields: Dict[str, TextField] = field(default_factory=dict)
    delegates: Dict[str, RecordingTextFieldDelegate] = field(default_factory=dict)

    def add_field(
        self,
        text_field: TextField,
        delegate: Optional[RecordingTextFieldDelegate] = None,
        embed: bool = True,
    ) -> TextField:
        self.fields[text_field.name] = text_field
        if delegate is not None:
            self.delegates[text_field.name] = delegate
            text_field.delegate = delegate
        if embed:
            self.window.embed(text_field)
        self.recorder.register_all_events(text_field)
        return text_field

    def remove_field(self, name: str) -> None:
        text_field = self.fields.pop(name)
        self.delegates.pop(name, None)
        self.recorder.unregister(text_field)
        self.window.remove(text_field)

    def get_field(self, name: str) -> Optional[TextField]:
        return self.fields.get(name)


_SESSION: Optional[SimulationSession] = None


def get_session() -> SimulationSession:
    global _SESSION
    if _SESSION is None:
        _SESSION = SimulationSession()
    return _SESSION


def reset_session() -> SimulationSession:
    global _SESSION
    if _SESSION is not None:
        _SESSION.window.close()
    get_focus_arbiter().reset()
    _SESSION = SimulationSession()
    return _SESSION

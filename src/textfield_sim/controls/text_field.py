from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from textfield_sim.controls.events import ControlEvent, Observer, expand
from textfield_sim.runtime.focus import get_focus_arbiter

if TYPE_CHECKING:
    from textfield_sim.controls.container import Window


class ClearButtonMode(str, Enum):
    ALWAYS = "always"
    NEVER = "never"
    WHILE_EDITING = "whileEditing"
    UNLESS_EDITING = "unlessEditing"


@dataclass(frozen=True)
class EditRange:
    location: int
    length: int

    def __post_init__(self) -> None:
        if self.location < 0 or self.length < 0:
            raise ValueError(f"EditRange must be non-negative, got ({self.location}, {self.length})")

    @property
    def end(self) -> int:
        return self.location + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0


@dataclass(eq=False)
class TextField:
    """Simulated editable text control.

    Focus is not stored on the field; ``is_focused`` asks the arbiter, which holds
    the only reference to the focused field. The delegate is held weakly, so the
    caller must keep it alive for as long as it should be consulted.
    """

    name: str = "text_field"
    text: str = ""
    is_visible: bool = True
    is_enabled: bool = True
    user_interaction_enabled: bool = True
    clear_button_mode: ClearButtonMode = ClearButtonMode.NEVER
    clears_on_focus: bool = False
    container: Optional["Window"] = None
    _delegate_ref: Optional[weakref.ReferenceType] = field(default=None, init=False, repr=False)
    _observers: List[Observer] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.clear_button_mode = ClearButtonMode(self.clear_button_mode)

    @property
    def delegate(self) -> Optional[Any]:
        if self._delegate_ref is None:
            return None
        return self._delegate_ref()

    @delegate.setter
    def delegate(self, value: Optional[Any]) -> None:
        self._delegate_ref = weakref.ref(value) if value is not None else None

    @property
    def is_focused(self) -> bool:
        return get_focus_arbiter().focused is self

    @property
    def is_attached(self) -> bool:
        return self.container is not None and self.container.is_live

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, event: ControlEvent) -> None:
        for tag in expand(event):
            for observer in list(self._observers):
                observer(self, tag)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "text": self.text,
            "focused": self.is_focused,
            "visible": self.is_visible,
            "enabled": self.is_enabled,
            "user_interaction_enabled": self.user_interaction_enabled,
            "clear_button_mode": self.clear_button_mode.value,
            "clears_on_focus": self.clears_on_focus,
            "attached": self.is_attached,
        }

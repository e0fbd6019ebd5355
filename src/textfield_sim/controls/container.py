from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from textfield_sim.runtime.focus import get_focus_arbiter

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField


@dataclass(eq=False)
class Window:
    """Minimal stand-in for a host window; fields embedded here can take focus."""

    title: str = "main"
    is_live: bool = True
    fields: List["TextField"] = field(default_factory=list)

    def embed(self, text_field: "TextField") -> "TextField":
        if text_field.container is not None and text_field.container is not self:
            text_field.container.remove(text_field)
        text_field.container = self
        if text_field not in self.fields:
            self.fields.append(text_field)
        return text_field

    def remove(self, text_field: "TextField") -> None:
        if text_field in self.fields:
            self.fields.remove(text_field)
        if text_field.container is self:
            text_field.container = None
        get_focus_arbiter().forget(text_field)

    def close(self) -> None:
        for text_field in list(self.fields):
            self.remove(text_field)
        self.is_live = False

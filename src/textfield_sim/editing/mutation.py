from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textfield_sim.controls.delegate import ask
from textfield_sim.controls.events import ControlEvent
from textfield_sim.controls.text_field import ClearButtonMode, EditRange
from textfield_sim.errors import ClearUnavailable, NotFocused

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField

logger = logging.getLogger(__name__)


class TextMutationEngine:
    """Character-level edits gated by the delegate's ``should_change_text``.

    Typing, pasting and backspacing all funnel through ``apply_change``; they
    differ only in how the range and replacement are chosen and how many
    consultations they make.
    """

    def apply_change(self, text_field: "TextField", edit_range: EditRange, replacement: str) -> bool:
        if not ask(text_field, "should_change_text", edit_range, replacement):
            return False
        if edit_range.is_empty and not replacement:
            return True
        text = text_field.text
        text_field.text = text[: edit_range.location] + replacement + text[edit_range.end :]
        text_field.emit(ControlEvent.EDITING_CHANGED)
        return True

    def type(self, text_field: "TextField", text: str) -> None:
        self._require_focus(text_field)
        for character in text:
            self.apply_change(text_field, EditRange(len(text_field.text), 0), character)

    def paste(self, text_field: "TextField", text: str) -> None:
        self._require_focus(text_field)
        self.apply_change(text_field, EditRange(len(text_field.text), 0), text)

    def backspace(self, text_field: "TextField") -> None:
        self._require_focus(text_field)
        self._delete_last(text_field)

    def backspace_all(self, text_field: "TextField") -> None:
        self._require_focus(text_field)
        for _ in range(len(text_field.text)):
            if not text_field.text:
                break
            self._delete_last(text_field)

    def clear(self, text_field: "TextField") -> None:
        check_clear_button(text_field)
        if not ask(text_field, "should_clear"):
            return
        text_field.text = ""
        text_field.emit(ControlEvent.EDITING_CHANGED)

    def _delete_last(self, text_field: "TextField") -> None:
        size = len(text_field.text)
        self.apply_change(text_field, EditRange(max(0, size - 1), min(1, size)), "")

    def _require_focus(self, text_field: "TextField") -> None:
        if not text_field.is_focused:
            raise NotFocused()


def check_clear_button(text_field: "TextField") -> None:
    mode = text_field.clear_button_mode
    if mode == ClearButtonMode.ALWAYS:
        return
    if mode == ClearButtonMode.NEVER:
        raise ClearUnavailable("Clear button is never displayed.", data={"mode": mode.value})
    if mode == ClearButtonMode.WHILE_EDITING and not text_field.is_focused:
        raise ClearUnavailable("Clear button is hidden when not editing.", data={"mode": mode.value})
    if mode == ClearButtonMode.UNLESS_EDITING and text_field.is_focused:
        raise ClearUnavailable("Clear button is hidden when editing.", data={"mode": mode.value})

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from textfield_sim.controls.delegate import ask, notify
from textfield_sim.controls.events import ControlEvent
from textfield_sim.errors import NotEnabled, NotFocused, NotInContainer, NotVisible, NoUserInteraction

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField

logger = logging.getLogger(__name__)


def check_available(text_field: "TextField") -> None:
    if not text_field.is_visible:
        raise NotVisible()
    if not text_field.is_enabled:
        raise NotEnabled()
    if not text_field.user_interaction_enabled:
        raise NoUserInteraction()


class FocusArbiter:
    """Holds the one reference to the focused field.

    ``_focused`` is always updated before the matching EDITING_DID_END or
    EDITING_DID_BEGIN is broadcast, so observers never see two focused fields.
    """

    def __init__(self) -> None:
        self._focused: Optional["TextField"] = None

    @property
    def focused(self) -> Optional["TextField"]:
        return self._focused

    def acquire(self, text_field: "TextField") -> None:
        check_available(text_field)
        if not text_field.is_attached:
            raise NotInContainer()
        if self._focused is text_field:
            return

        previous = self._focused
        if previous is not None:
            if not ask(previous, "should_end_editing"):
                logger.debug("%s kept focus; %s not focused", previous.name, text_field.name)
                return
            self._end(previous)

        text_field.emit(ControlEvent.TOUCH_DOWN)
        if not ask(text_field, "should_begin_editing"):
            return

        self._focused = text_field
        logger.debug("%s focused", text_field.name)
        text_field.emit(ControlEvent.EDITING_DID_BEGIN)
        notify(text_field, "did_begin_editing")

        # Implicit clear on focus emits nothing.
        if text_field.clears_on_focus and ask(text_field, "should_clear"):
            text_field.text = ""

    def release(self, text_field: "TextField") -> None:
        check_available(text_field)
        if self._focused is not text_field:
            raise NotFocused()
        if not ask(text_field, "should_end_editing"):
            return
        self._end(text_field)

    def forget(self, text_field: "TextField") -> None:
        if self._focused is text_field:
            logger.debug("%s dropped from focus without events", text_field.name)
            self._focused = None

    def reset(self) -> None:
        self._focused = None

    def _end(self, text_field: "TextField") -> None:
        self._focused = None
        logger.debug("%s unfocused", text_field.name)
        text_field.emit(ControlEvent.EDITING_DID_END)
        notify(text_field, "did_end_editing")


_FOCUS_ARBITER = FocusArbiter()


def get_focus_arbiter() -> FocusArbiter:
    return _FOCUS_ARBITER


def reset_focus_arbiter() -> FocusArbiter:
    _FOCUS_ARBITER.reset()
    return _FOCUS_ARBITER

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from textfield_sim.actions.step_trace import StepTraceBuilder
from textfield_sim.editing.mutation import TextMutationEngine
from textfield_sim.errors import ClearUnavailable, NotEditable, NotFocused, NotInContainer, TextFieldError
from textfield_sim.runtime.focus import check_available, get_focus_arbiter

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField

logger = logging.getLogger(__name__)

UNAVAILABLE_PREFIX = "TextField unavailable for editing"
EDIT_PREFIX = "Could not edit TextField"
CLEAR_PREFIX = "Could not clear text from TextField"

NOT_IN_WINDOW = (
    "Text field failed to become first responder. "
    "This can happen if the field is not part of the window's hierarchy."
)
MUST_START_BEFORE_STOP = "Must start editing the text field before you can stop editing it."
MUST_START_BEFORE_TYPE = "Must start editing the text field before text can be typed into it."
MUST_START_BEFORE_PASTE = "Must start editing the text field before text can be pasted into it."
MUST_START_BEFORE_BACKSPACE = "Must start editing the text field before backspaces can be performed."


class InteractionFacade:
    """User-level text field interactions.

    Every operation checks that the field is visible, enabled and accepts user
    interaction before touching focus or text. On success it returns the step
    trace; on failure it raises the typed error with the trace attached under
    ``data["trace"]``. Delegate denials are not failures.
    """

    def __init__(self, engine: Optional[TextMutationEngine] = None) -> None:
        self.engine = engine or TextMutationEngine()

    def start_editing(self, text_field: "TextField") -> Dict[str, Any]:
        return self._perform("startEditing", text_field, lambda: get_focus_arbiter().acquire(text_field))

    def stop_editing(self, text_field: "TextField") -> Dict[str, Any]:
        return self._perform(
            "stopEditing",
            text_field,
            lambda: get_focus_arbiter().release(text_field),
            not_focused=MUST_START_BEFORE_STOP,
        )

    def type(self, text_field: "TextField", text: str) -> Dict[str, Any]:
        return self._perform(
            "type", text_field, lambda: self.engine.type(text_field, text), not_focused=MUST_START_BEFORE_TYPE
        )

    def paste(self, text_field: "TextField", text: str) -> Dict[str, Any]:
        return self._perform(
            "paste", text_field, lambda: self.engine.paste(text_field, text), not_focused=MUST_START_BEFORE_PASTE
        )

    def backspace(self, text_field: "TextField") -> Dict[str, Any]:
        return self._perform(
            "backspace", text_field, lambda: self.engine.backspace(text_field), not_focused=MUST_START_BEFORE_BACKSPACE
        )

    def backspace_all(self, text_field: "TextField") -> Dict[str, Any]:
        return self._perform(
            "backspaceAll",
            text_field,
            lambda: self.engine.backspace_all(text_field),
            not_focused=MUST_START_BEFORE_BACKSPACE,
        )

    def clear_text(self, text_field: "TextField") -> Dict[str, Any]:
        return self._perform("clearText", text_field, lambda: self.engine.clear(text_field))

    def enter(self, text_field: "TextField", text: str) -> Dict[str, Any]:
        def action() -> None:
            arbiter = get_focus_arbiter()
            arbiter.acquire(text_field)
            # Refused by should_begin_editing: nothing to type into.
            if not text_field.is_focused:
                return
            self.engine.type(text_field, text)
            arbiter.release(text_field)

        return self._perform("enter", text_field, action, not_focused=MUST_START_BEFORE_TYPE)

    def _perform(
        self,
        operation: str,
        text_field: "TextField",
        action: Callable[[], None],
        not_focused: str = MUST_START_BEFORE_TYPE,
    ) -> Dict[str, Any]:
        trace = StepTraceBuilder(operation=operation, field_name=text_field.name)
        trace.watch(text_field)
        try:
            check_available(text_field)
            action()
        except TextFieldError as exc:
            error = _translate(exc, not_focused)
            trace.error = error.message
            trace.error_code = error.code
            error.data = dict(error.data or {})
            error.data["trace"] = trace.finish()
            logger.debug("%s on %s failed: %s", operation, text_field.name, error.message)
            if error is exc:
                raise
            raise error from exc
        except Exception:
            trace.unwatch()
            raise
        trace.ok = True
        return trace.finish()


def _translate(exc: TextFieldError, not_focused: str) -> TextFieldError:
    if isinstance(exc, NotInContainer):
        return NotInContainer(f"{EDIT_PREFIX}: {NOT_IN_WINDOW}", data=exc.data)
    if isinstance(exc, NotEditable):
        return type(exc)(f"{UNAVAILABLE_PREFIX}: {exc.message}", data=exc.data)
    if isinstance(exc, NotFocused):
        return NotFocused(f"{EDIT_PREFIX}: {not_focused}", data=exc.data)
    if isinstance(exc, ClearUnavailable):
        return ClearUnavailable(f"{CLEAR_PREFIX}: {exc.message}", data=exc.data)
    return exc

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Tuple


class ControlEvent(str, Enum):
    TOUCH_DOWN = "touchDown"
    ALL_TOUCH_EVENTS = "allTouchEvents"
    EDITING_DID_BEGIN = "editingDidBegin"
    ALL_EDITING_EVENTS = "allEditingEvents"
    EDITING_CHANGED = "editingChanged"
    EDITING_DID_END = "editingDidEnd"


UMBRELLA_EVENTS: Dict[ControlEvent, ControlEvent] = {
    ControlEvent.TOUCH_DOWN: ControlEvent.ALL_TOUCH_EVENTS,
    ControlEvent.EDITING_DID_BEGIN: ControlEvent.ALL_EDITING_EVENTS,
    ControlEvent.EDITING_CHANGED: ControlEvent.ALL_EDITING_EVENTS,
    ControlEvent.EDITING_DID_END: ControlEvent.ALL_EDITING_EVENTS,
}

# (field, event) -> None
Observer = Callable[[object, ControlEvent], None]


def expand(event: ControlEvent) -> Tuple[ControlEvent, ...]:
    """Return the tags broadcast for ``event``: the event itself, then its umbrella."""
    umbrella = UMBRELLA_EVENTS.get(event)
    if umbrella is None:
        return (event,)
    return (event, umbrella)

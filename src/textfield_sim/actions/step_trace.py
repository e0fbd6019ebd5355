from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from textfield_sim.controls.events import ControlEvent

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField


@dataclass
class StepTraceBuilder:
    operation: str
    field_name: str
    started_at: str = field(default_factory=lambda: _now_iso())
    ended_at: Optional[str] = None
    ok: bool = False
    events: List[str] = field(default_factory=list)
    text_before: Optional[str] = None
    text_after: Optional[str] = None
    focused_after: Optional[bool] = None
    error: Optional[str] = None
    error_code: Optional[int] = None
    _watched: Optional["TextField"] = field(default=None, repr=False)

    def watch(self, text_field: "TextField") -> None:
        self._watched = text_field
        self.text_before = text_field.text
        text_field.add_observer(self._on_event)

    def unwatch(self) -> None:
        if self._watched is None:
            return
        self._watched.remove_observer(self._on_event)
        self.text_after = self._watched.text
        self.focused_after = self._watched.is_focused
        self._watched = None

    def _on_event(self, _: "TextField", event: ControlEvent) -> None:
        self.events.append(ControlEvent(event).value)

    def finish(self) -> Dict[str, Any]:
        self.unwatch()
        self.ended_at = self.ended_at or _now_iso()
        payload: Dict[str, Any] = {
            "operation": self.operation,
            "field": self.field_name,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "ok": self.ok,
            "events": self.events,
        }
        if self.text_before is not None:
            payload["text_before"] = self.text_before
        if self.text_after is not None:
            payload["text_after"] = self.text_after
        if self.focused_after is not None:
            payload["focused_after"] = self.focused_after
        if self.error:
            payload["error"] = self.error
        if self.error_code is not None:
            payload["error_code"] = self.error_code
        return payload


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

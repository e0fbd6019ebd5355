from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from textfield_sim.controls.events import ControlEvent

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import TextField


@dataclass
class ControlEventRecorder:
    entries: List[Dict[str, Any]] = field(default_factory=list)
    _fields: List["TextField"] = field(default_factory=list, repr=False)

    @property
    def recorded_events(self) -> List[ControlEvent]:
        return [entry["event"] for entry in self.entries]

    def register_all_events(self, text_field: "TextField") -> None:
        if any(existing is text_field for existing in self._fields):
            return
        text_field.add_observer(self._on_event)
        self._fields.append(text_field)

    def unregister(self, text_field: "TextField") -> None:
        text_field.remove_observer(self._on_event)
        self._fields = [existing for existing in self._fields if existing is not text_field]

    def erase(self) -> None:
        self.entries = []

    def events_for(self, text_field: "TextField") -> List[ControlEvent]:
        return [entry["event"] for entry in self.entries if entry["field"] is text_field]

    def export(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            for entry in self.entries:
                handle.write(json.dumps(_serialize(entry), ensure_ascii=False) + "\n")
        return path

    def _on_event(self, text_field: "TextField", event: ControlEvent) -> None:
        self.entries.append(build_entry(len(self.entries), event, text_field))


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_entry(
    seq: int, event: ControlEvent, text_field: "TextField", timestamp: Optional[str] = None
) -> Dict[str, Any]:
    return {
        "seq": seq,
        "event": event,
        "field": text_field,
        "timestamp": timestamp or now_iso(),
    }


def _serialize(entry: Dict[str, Any]) -> Dict[str, Any]:
    payload = dict(entry)
    payload["event"] = ControlEvent(entry["event"]).value
    payload["field"] = entry["field"].name
    return payload

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from textfield_sim.controls.text_field import EditRange, TextField

logger = logging.getLogger(__name__)


class TextFieldDelegate(Protocol):
    """Full capability set. Real delegates may implement any subset of it."""

    def should_begin_editing(self, text_field: "TextField") -> bool: ...

    def did_begin_editing(self, text_field: "TextField") -> None: ...

    def should_end_editing(self, text_field: "TextField") -> bool: ...

    def did_end_editing(self, text_field: "TextField") -> None: ...

    def should_change_text(self, text_field: "TextField", edit_range: "EditRange", replacement: str) -> bool: ...

    def should_clear(self, text_field: "TextField") -> bool: ...


def ask(text_field: "TextField", hook: str, *args: Any) -> bool:
    """Consult an approval hook; a missing delegate or hook answers True."""
    delegate = text_field.delegate
    method = getattr(delegate, hook, None) if delegate is not None else None
    if method is None:
        return True
    allowed = bool(method(text_field, *args))
    if not allowed:
        logger.debug("%s denied by delegate of %s", hook, text_field.name)
    return allowed


def notify(text_field: "TextField", hook: str) -> None:
    delegate = text_field.delegate
    method = getattr(delegate, hook, None) if delegate is not None else None
    if method is not None:
        method(text_field)


@dataclass
class RecordingTextFieldDelegate:
    should_allow_begin_editing: bool = True
    should_allow_end_editing: bool = True
    should_allow_change_text: bool = True
    should_allow_clear: bool = True
    did_call_should_begin_editing: bool = False
    did_call_did_begin_editing: bool = False
    did_call_should_end_editing: bool = False
    did_call_did_end_editing: bool = False
    did_call_should_clear: bool = False
    text_changes: List[str] = field(default_factory=list)
    text_ranges: List["EditRange"] = field(default_factory=list)
    calls: List[Tuple[str, Optional[Tuple[Any, ...]]]] = field(default_factory=list)

    def should_begin_editing(self, text_field: "TextField") -> bool:
        self.did_call_should_begin_editing = True
        self.calls.append(("should_begin_editing", None))
        return self.should_allow_begin_editing

    def did_begin_editing(self, text_field: "TextField") -> None:
        self.did_call_did_begin_editing = True
        self.calls.append(("did_begin_editing", None))

    def should_end_editing(self, text_field: "TextField") -> bool:
        self.did_call_should_end_editing = True
        self.calls.append(("should_end_editing", None))
        return self.should_allow_end_editing

    def did_end_editing(self, text_field: "TextField") -> None:
        self.did_call_did_end_editing = True
        self.calls.append(("did_end_editing", None))

    def should_change_text(self, text_field: "TextField", edit_range: "EditRange", replacement: str) -> bool:
        self.text_ranges.append(edit_range)
        self.calls.append(("should_change_text", (edit_range, replacement)))
        if self.should_allow_change_text:
            self.text_changes.append(replacement)
        return self.should_allow_change_text

    def should_clear(self, text_field: "TextField") -> bool:
        self.did_call_should_clear = True
        self.calls.append(("should_clear", None))
        return self.should_allow_clear

    def reset_state(self) -> None:
        self.did_call_should_begin_editing = False
        self.did_call_did_begin_editing = False
        self.did_call_should_end_editing = False
        self.did_call_did_end_editing = False
        self.did_call_should_clear = False
        self.text_changes = []
        self.text_ranges = []
        self.calls = []

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

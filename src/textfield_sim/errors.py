from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class TextFieldError(Exception):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


class NotEditable(TextFieldError):
    def __init__(self, message: str = "Text field is not editable", data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(2000, message, data)


class NotVisible(NotEditable):
    def __init__(self, message: str = "Text field is not visible.", data: Optional[Dict[str, Any]] = None) -> None:
        TextFieldError.__init__(self, 2001, message, data)


class NotEnabled(NotEditable):
    def __init__(self, message: str = "Text field is not enabled.", data: Optional[Dict[str, Any]] = None) -> None:
        TextFieldError.__init__(self, 2002, message, data)


class NoUserInteraction(NotEditable):
    def __init__(
        self, message: str = "View does not allow user interaction.", data: Optional[Dict[str, Any]] = None
    ) -> None:
        TextFieldError.__init__(self, 2003, message, data)


class NotInContainer(NotEditable):
    def __init__(
        self, message: str = "Text field is not in a focusable container.", data: Optional[Dict[str, Any]] = None
    ) -> None:
        TextFieldError.__init__(self, 2004, message, data)


class NotFocused(TextFieldError):
    def __init__(self, message: str = "Text field is not focused.", data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(2005, message, data)


class ClearUnavailable(TextFieldError):
    def __init__(self, message: str = "Clear button is not displayed.", data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(2006, message, data)

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from textfield_sim.config import get_settings
from textfield_sim.controls.delegate import RecordingTextFieldDelegate
from textfield_sim.controls.text_field import ClearButtonMode, TextField
from textfield_sim.errors import TextFieldError
from textfield_sim.runtime.session import get_session, reset_session

JSONRPC_VERSION = "2.0"
SERVICE_NAME = "textfield-sim"
SERVICE_VERSION = "0.1"

ERROR_PARSE = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL = -32603

FIELD_FLAGS = {
    "visible": "is_visible",
    "enabled": "is_enabled",
    "user_interaction_enabled": "user_interaction_enabled",
    "clears_on_focus": "clears_on_focus",
}
DELEGATE_FLAGS = (
    "should_allow_begin_editing",
    "should_allow_end_editing",
    "should_allow_change_text",
    "should_allow_clear",
)

logger = logging.getLogger(__name__)


@dataclass
class JsonRpcError(Exception):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


def make_error_response(request_id: Any, error: JsonRpcError) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {
            "code": error.code,
            "message": error.message,
        },
    }
    if error.data is not None:
        payload["error"]["data"] = error.data
    return payload


def make_result_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "result": result,
    }


def validate_request(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise JsonRpcError(ERROR_INVALID_REQUEST, "Invalid request")
    if payload.get("jsonrpc") != JSONRPC_VERSION:
        raise JsonRpcError(ERROR_INVALID_REQUEST, "Invalid JSON-RPC version")
    if "method" not in payload:
        raise JsonRpcError(ERROR_INVALID_REQUEST, "Missing method")
    if "id" not in payload:
        raise JsonRpcError(ERROR_INVALID_REQUEST, "Missing id")
    return payload


def handle_ping(_: Dict[str, Any]) -> Dict[str, Any]:
    return {"ok": True, "service": SERVICE_NAME, "version": SERVICE_VERSION}


def handle_session_reset(_: Dict[str, Any]) -> Dict[str, Any]:
    reset_session()
    return {"ok": True}


def handle_field_create(params: Dict[str, Any]) -> Dict[str, Any]:
    name = _require_name(params)
    session = get_session()
    if session.get_field(name) is not None:
        raise JsonRpcError(ERROR_INVALID_PARAMS, f"Field already exists: {name}")

    settings = get_settings()
    text_field = TextField(
        name=name,
        text=str(params.get("text", "")),
        clear_button_mode=_parse_mode(params.get("clear_button_mode", settings.default_clear_button_mode)),
        clears_on_focus=bool(params.get("clears_on_focus", settings.default_clears_on_focus)),
    )
    _apply_flags(text_field, params)

    delegate = None
    delegate_params = params.get("delegate", {})
    if delegate_params is not None:
        if not isinstance(delegate_params, dict):
            raise JsonRpcError(ERROR_INVALID_PARAMS, "delegate must be an object or null")
        delegate = RecordingTextFieldDelegate(
            **{flag: bool(delegate_params[flag]) for flag in DELEGATE_FLAGS if flag in delegate_params}
        )

    session.add_field(text_field, delegate=delegate, embed=bool(params.get("embed", settings.embed_new_fields)))
    return {"ok": True, "field": text_field.describe()}


def handle_field_update(params: Dict[str, Any]) -> Dict[str, Any]:
    text_field = _require_field(params)
    if "clear_button_mode" in params:
        text_field.clear_button_mode = _parse_mode(params["clear_button_mode"])
    _apply_flags(text_field, params)
    delegate = get_session().delegates.get(text_field.name)
    delegate_params = params.get("delegate")
    if isinstance(delegate_params, dict) and delegate is not None:
        for flag in DELEGATE_FLAGS:
            if flag in delegate_params:
                setattr(delegate, flag, bool(delegate_params[flag]))
    return {"ok": True, "field": text_field.describe()}


def handle_field_remove(params: Dict[str, Any]) -> Dict[str, Any]:
    text_field = _require_field(params)
    get_session().remove_field(text_field.name)
    return {"ok": True}


def handle_field_state(params: Dict[str, Any]) -> Dict[str, Any]:
    text_field = _require_field(params)
    result: Dict[str, Any] = {"ok": True, "field": text_field.describe()}
    delegate = get_session().delegates.get(text_field.name)
    if delegate is not None:
        result["delegate"] = {
            "calls": delegate.call_names(),
            "text_changes": list(delegate.text_changes),
            "text_ranges": [[r.location, r.length] for r in delegate.text_ranges],
        }
    return result


def handle_field_events(params: Dict[str, Any]) -> Dict[str, Any]:
    text_field = _require_field(params)
    recorder = get_session().recorder
    events = [event.value for event in recorder.events_for(text_field)]
    if params.get("erase"):
        recorder.erase()
    return {"ok": True, "events": events}


def _interaction(method: str, needs_text: bool = False) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    def handler(params: Dict[str, Any]) -> Dict[str, Any]:
        text_field = _require_field(params)
        operation = getattr(get_session().facade, method)
        if not needs_text:
            return {"ok": True, "trace": operation(text_field)}
        text = params.get("text")
        if not isinstance(text, str):
            raise JsonRpcError(ERROR_INVALID_PARAMS, "text must be a string")
        return {"ok": True, "trace": operation(text_field, text)}

    return handler


HANDLERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "system.ping": handle_ping,
    "session.reset": handle_session_reset,
    "field.create": handle_field_create,
    "field.update": handle_field_update,
    "field.remove": handle_field_remove,
    "field.state": handle_field_state,
    "field.events": handle_field_events,
    "field.startEditing": _interaction("start_editing"),
    "field.stopEditing": _interaction("stop_editing"),
    "field.type": _interaction("type", needs_text=True),
    "field.paste": _interaction("paste", needs_text=True),
    "field.backspace": _interaction("backspace"),
    "field.backspaceAll": _interaction("backspace_all"),
    "field.clearText": _interaction("clear_text"),
    "field.enter": _interaction("enter", needs_text=True),
}


def handle_request(payload: Any) -> Optional[Dict[str, Any]]:
    request_id = None
    try:
        data = validate_request(payload)
        request_id = data.get("id")
        method = data.get("method")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise JsonRpcError(ERROR_INVALID_PARAMS, "params must be an object")

        handler = HANDLERS.get(method)
        if handler is None:
            raise JsonRpcError(ERROR_METHOD_NOT_FOUND, "Method not found")

        result = handler(params)
        return make_result_response(request_id, result)
    except JsonRpcError as exc:
        return make_error_response(request_id, exc)
    except TextFieldError as exc:
        return make_error_response(request_id, JsonRpcError(exc.code, exc.message, exc.data))
    except Exception as exc:  # pragma: no cover - last resort
        logger.exception("Unhandled error in %s", payload)
        return make_error_response(request_id, JsonRpcError(ERROR_INTERNAL, str(exc)))


def serve() -> None:
    logging.basicConfig(
        level=get_settings().log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for line in sys.stdin:
        message = line.strip()
        if not message:
            continue
        try:
            payload = json.loads(message)
        except json.JSONDecodeError:
            response = make_error_response(None, JsonRpcError(ERROR_PARSE, "Parse error"))
            write_response(response)
            continue

        response = handle_request(payload)
        if response is not None:
            write_response(response)


def write_response(payload: Dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload) + "\n")
    sys.stdout.flush()


def _require_name(params: Dict[str, Any]) -> str:
    name = params.get("name")
    if not isinstance(name, str) or not name:
        raise JsonRpcError(ERROR_INVALID_PARAMS, "name is required")
    return name


def _require_field(params: Dict[str, Any]) -> TextField:
    name = _require_name(params)
    text_field = get_session().get_field(name)
    if text_field is None:
        raise JsonRpcError(ERROR_INVALID_PARAMS, f"Unknown field: {name}")
    return text_field


def _parse_mode(value: Any) -> ClearButtonMode:
    try:
        return ClearButtonMode(value)
    except ValueError as exc:
        raise JsonRpcError(ERROR_INVALID_PARAMS, f"Invalid clear_button_mode: {value}") from exc


def _apply_flags(text_field: TextField, params: Dict[str, Any]) -> None:
    for key, attribute in FIELD_FLAGS.items():
        if key in params:
            setattr(text_field, attribute, bool(params[key]))


if __name__ == "__main__":
    serve()

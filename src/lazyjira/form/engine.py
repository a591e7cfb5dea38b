"""The form's transition function.

`handle_event` is the only place a `FormState` changes. It is pure: the terminal
driver feeds it one event at a time and redraws from whatever it returns.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from lazyjira.form.events import (
    Advance,
    Cancel,
    ClearField,
    DeleteBackward,
    EditEvent,
    FormEvent,
    InsertText,
    Resize,
    Retreat,
)
from lazyjira.form.state import MAX_WIDTH, FormState, FormStatus, finish


class Signal(str, Enum):
    RENDER = "render"
    TERMINATE = "terminate"


def handle_event(state: FormState, event: FormEvent) -> tuple[FormState, Signal]:
    if state.is_terminal:
        return state, Signal.TERMINATE

    if isinstance(event, Cancel):
        return finish(state, FormStatus.CANCELLED), Signal.TERMINATE

    if isinstance(event, Resize):
        return replace(state, width=min(event.width, MAX_WIDTH)), Signal.RENDER

    if isinstance(event, EditEvent):
        return _edit(state, event), Signal.RENDER

    if isinstance(event, Retreat):
        return replace(state, focus=max(state.focus - 1, 0)), Signal.RENDER

    if isinstance(event, Advance):
        return _advance(state)

    raise TypeError(f"Unsupported form event: {event!r}")


def _edit(state: FormState, event: EditEvent) -> FormState:
    current = state.current
    if isinstance(event, InsertText):
        updated = current.with_value(current.value + event.text)
    elif isinstance(event, DeleteBackward):
        updated = current.with_value(current.value[:-1])
    else:
        updated = current.with_value("")

    fields = state.fields[: state.focus] + (updated,) + state.fields[state.focus + 1 :]
    return replace(
        state,
        fields=fields,
        errors=_with_error(state.errors, state.focus, updated.validate()),
    )


def _advance(state: FormState) -> tuple[FormState, Signal]:
    error = state.current.validate()
    if error is not None:
        return replace(state, errors=_with_error(state.errors, state.focus, error)), Signal.RENDER

    errors = _with_error(state.errors, state.focus, None)
    if state.focus < len(state.fields) - 1:
        return replace(state, focus=state.focus + 1, errors=errors), Signal.RENDER

    # Last field: every field must validate before the form completes.
    failing = {
        idx: message
        for idx, spec in enumerate(state.fields)
        if (message := spec.validate()) is not None
    }
    if failing:
        return replace(state, focus=min(failing), errors=failing), Signal.RENDER

    return finish(replace(state, errors={}), FormStatus.COMPLETED), Signal.TERMINATE


def _with_error(errors: dict[int, str], idx: int, message: str | None) -> dict[int, str]:
    updated = {k: v for k, v in errors.items() if k != idx}
    if message is not None:
        updated[idx] = message
    return updated

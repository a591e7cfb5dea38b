"""Interactive ticket form: state, transitions, rendering and the curses driver."""

from lazyjira.form.engine import Signal, handle_event
from lazyjira.form.render import render
from lazyjira.form.state import (
    MAX_WIDTH,
    FieldKind,
    FieldSpec,
    FormState,
    FormStatus,
    IllegalTransitionError,
    default_fields,
    initialize,
)

__all__ = [
    "MAX_WIDTH",
    "FieldKind",
    "FieldSpec",
    "FormState",
    "FormStatus",
    "IllegalTransitionError",
    "Signal",
    "default_fields",
    "handle_event",
    "initialize",
    "render",
]

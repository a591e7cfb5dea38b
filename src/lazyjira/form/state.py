from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

MAX_WIDTH = 160


class FormStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[FormStatus, set[FormStatus]] = {
    FormStatus.ACTIVE: {FormStatus.COMPLETED, FormStatus.CANCELLED},
    FormStatus.COMPLETED: set(),
    FormStatus.CANCELLED: set(),
}


class IllegalTransitionError(ValueError):
    pass


class FieldKind(str, Enum):
    SINGLE_LINE = "single-line"
    MULTI_LINE = "multi-line"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One collectible value and its text buffer."""

    label: str
    kind: FieldKind = FieldKind.SINGLE_LINE
    value: str = ""
    required: bool = False
    max_length: int | None = None

    def validate(self) -> str | None:
        """Return an error message, or None if the buffer satisfies the constraints."""

        if self.required and not self.value.strip():
            return f"{self.label} is required"
        if self.max_length is not None and len(self.value) > self.max_length:
            return f"{self.label} must be at most {self.max_length} characters"
        return None

    def with_value(self, value: str) -> FieldSpec:
        if self.kind is FieldKind.SINGLE_LINE:
            value = value.replace("\r", "").replace("\n", "")
        return replace(self, value=value)


def default_fields() -> tuple[FieldSpec, ...]:
    """The Summary/Description pair used to create a ticket."""

    return (
        FieldSpec(label="Summary", kind=FieldKind.SINGLE_LINE, required=True, max_length=255),
        FieldSpec(label="Description", kind=FieldKind.MULTI_LINE, max_length=32767),
    )


@dataclass(frozen=True, slots=True)
class FormState:
    """A snapshot of the form.

    Snapshots are never mutated; every transition returns a new one.
    """

    fields: tuple[FieldSpec, ...]
    focus: int = 0
    errors: dict[int, str] = field(default_factory=dict)
    status: FormStatus = FormStatus.ACTIVE
    width: int = MAX_WIDTH

    @property
    def current(self) -> FieldSpec:
        return self.fields[self.focus]

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(f.value for f in self.fields)

    @property
    def is_terminal(self) -> bool:
        return self.status is not FormStatus.ACTIVE

    @property
    def error_messages(self) -> list[str]:
        """Field errors in field order."""

        return [self.errors[idx] for idx in sorted(self.errors)]


def initialize(
    fields: tuple[FieldSpec, ...] | None = None, *, width: int = MAX_WIDTH
) -> FormState:
    fields = default_fields() if fields is None else tuple(fields)
    if not fields:
        raise ValueError("A form needs at least one field")
    return FormState(
        fields=tuple(replace(f, value="") for f in fields),
        width=min(width, MAX_WIDTH),
    )


def finish(state: FormState, to: FormStatus) -> FormState:
    allowed = ALLOWED_TRANSITIONS.get(state.status, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {state.status.value} -> {to.value}")
    return replace(state, status=to)

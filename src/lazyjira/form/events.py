from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Resize:
    """The terminal changed size."""

    width: int


@dataclass(frozen=True, slots=True)
class Cancel:
    """The operator aborted the form (esc / ctrl+c)."""


@dataclass(frozen=True, slots=True)
class InsertText:
    text: str


@dataclass(frozen=True, slots=True)
class DeleteBackward:
    pass


@dataclass(frozen=True, slots=True)
class ClearField:
    pass


@dataclass(frozen=True, slots=True)
class Advance:
    """Move to the next field, or submit from the last one."""


@dataclass(frozen=True, slots=True)
class Retreat:
    """Move to the previous field without validating."""


EditEvent = InsertText | DeleteBackward | ClearField
FormEvent = Resize | Cancel | InsertText | DeleteBackward | ClearField | Advance | Retreat

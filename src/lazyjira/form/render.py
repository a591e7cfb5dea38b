"""Pure rendering of a `FormState`.

The renderer only names style roles (``form.*``); the colors behind them live in
`THEME`, so a rich console and the curses driver can each map them their own way.
"""

from __future__ import annotations

from rich.cells import cell_len, chop_cells
from rich.text import Text
from rich.theme import Theme

from lazyjira.form.state import FieldKind, FieldSpec, FormState

TITLE = "Create a JIRA Ticket"

INDIGO = "#7571F9"
RED = "#FE5F86"
GREEN = "#02BF87"

THEME = Theme(
    {
        "form.header": f"bold {INDIGO}",
        "form.error": f"bold {RED}",
        "form.fill": INDIGO,
        "form.error_fill": RED,
        "form.highlight": "color(212)",
        "form.help": "color(240)",
        "form.status": f"bold {GREEN}",
    }
)

# Base frame: one blank line on top, one column of padding left and four right.
PADDING_TOP = 1
PADDING_LEFT = 1
PADDING_RIGHT = 4

FORM_WIDTH = 45
TEXTAREA_HEIGHT = 5

HELP = "enter next • shift+tab back • ctrl+j new line • esc cancel"

_FOCUS_BAR = "┃ "
_NO_BAR = "  "
_PROMPT = "> "
_CURSOR = "█"


def content_width(width: int) -> int:
    return max(width - PADDING_LEFT - PADDING_RIGHT, 0)


def render(state: FormState) -> Text:
    inner = content_width(state.width)

    if state.errors:
        header = _boundary("; ".join(state.error_messages), inner, error=True)
        footer = _boundary("", inner, error=True)
    else:
        header = _boundary(TITLE, inner)
        footer = _boundary(HELP, inner, help_text=True)

    lines: list[Text] = [Text("") for _ in range(PADDING_TOP)]
    lines.append(header)
    lines.extend(_form_view(state, min(FORM_WIDTH, inner)))
    lines.append(Text(""))
    lines.append(footer)

    pad = " " * PADDING_LEFT
    return Text("\n").join(Text(pad) + line if line.plain else line for line in lines)


def _boundary(label: str, width: int, *, error: bool = False, help_text: bool = False) -> Text:
    """A label followed by ``/`` filling the rest of the line."""

    if error:
        style, fill_style = "form.error", "form.error_fill"
    elif help_text:
        style, fill_style = "form.help", "form.fill"
    else:
        style, fill_style = "form.header", "form.fill"

    text = Text()
    text.append(f"  {label} ", style=style)
    text.truncate(width)
    remaining = width - text.cell_len
    if remaining > 0:
        text.append("/" * remaining, style=fill_style)
    return text


def _form_view(state: FormState, width: int) -> list[Text]:
    lines: list[Text] = []
    for idx, spec in enumerate(state.fields):
        if idx:
            lines.append(Text(""))
        lines.extend(
            _field_view(spec, width, focused=idx == state.focus, invalid=idx in state.errors)
        )
    return lines


def _field_view(spec: FieldSpec, width: int, *, focused: bool, invalid: bool) -> list[Text]:
    bar = Text(_FOCUS_BAR, style="form.highlight") if focused else Text(_NO_BAR)

    title = bar.copy()
    title.append(f"{spec.label}:", style="form.highlight" if focused else "")
    if invalid:
        title.append(" *", style="form.error")
    lines = [title]

    body_width = max(width - cell_len(_FOCUS_BAR), 1)
    value = spec.value + (_CURSOR if focused else "")
    if spec.kind is FieldKind.SINGLE_LINE:
        rows = _wrap(_PROMPT + value, body_width)
    else:
        rows = [row for line in value.split("\n") for row in _wrap(line, body_width)]
        rows = rows[-TEXTAREA_HEIGHT:]
        rows += [""] * (TEXTAREA_HEIGHT - len(rows))

    for row in rows:
        line = bar.copy()
        line.append(row)
        lines.append(line)
    return lines


def _wrap(line: str, width: int) -> list[str]:
    if not line:
        return [""]
    # Rows are measured in terminal cells so wide characters keep the frame aligned.
    return chop_cells(line, width)

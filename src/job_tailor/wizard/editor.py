"""Selection-based formatting for the inline CV editor.

All functions are pure: they take the full text and a selection and return
the new text plus the selection covering the inserted replacement.
"""

from __future__ import annotations

from dataclasses import dataclass

BOLD_MARKER = "**"
ITALIC_MARKER = "*"
BULLET_PREFIX = "- "


@dataclass(frozen=True)
class Selection:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid selection: {self.start}..{self.end}")


@dataclass(frozen=True)
class EditResult:
    text: str
    selection: Selection


def bold(text: str, selection: Selection) -> EditResult:
    return _replace(text, selection, lambda s: f"{BOLD_MARKER}{s}{BOLD_MARKER}")


def italic(text: str, selection: Selection) -> EditResult:
    return _replace(text, selection, lambda s: f"{ITALIC_MARKER}{s}{ITALIC_MARKER}")


def bullet(text: str, selection: Selection) -> EditResult:
    """Prefix every selected line with a bullet marker unless it has one."""
    return _replace(
        text,
        selection,
        lambda s: "\n".join(
            line if line.startswith(BULLET_PREFIX) else f"{BULLET_PREFIX}{line}"
            for line in s.split("\n")
        ),
    )


FORMATTERS = {
    "bold": bold,
    "italic": italic,
    "bullet": bullet,
}


def apply_format(kind: str, text: str, selection: Selection) -> EditResult:
    try:
        formatter = FORMATTERS[kind]
    except KeyError:
        raise ValueError(f"Unknown format: {kind}") from None
    return formatter(text, selection)


def find_selection(text: str, fragment: str) -> Selection | None:
    """Locate the first occurrence of ``fragment`` as a selection."""
    if not fragment:
        return None
    start = text.find(fragment)
    if start == -1:
        return None
    return Selection(start, start + len(fragment))


def _replace(text: str, selection: Selection, transform) -> EditResult:
    end = min(selection.end, len(text))
    start = min(selection.start, end)
    replacement = transform(text[start:end])
    return EditResult(
        text=text[:start] + replacement + text[end:],
        selection=Selection(start, start + len(replacement)),
    )

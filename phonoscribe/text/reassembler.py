from typing import Iterable

# no whitespace allowed before these
CLOSING_PUNCTUATION = frozenset(".,!?;:")
CLOSING_BRACKETS = frozenset("])}»”’")
# nor after these
OPENING_BRACKETS = frozenset("[({«“‘")


def _strip_space_before(text: str, delimiters: frozenset) -> str:
    out: list[str] = []
    for char in text:
        if char in delimiters:
            while out and out[-1].isspace():
                out.pop()
        out.append(char)
    return "".join(out)


def _strip_space_after(text: str, delimiters: frozenset) -> str:
    out: list[str] = []
    skipping = False
    for char in text:
        if skipping and char.isspace():
            continue
        skipping = char in delimiters
        out.append(char)
    return "".join(out)


def reassemble(parts: Iterable[str]) -> str:
    """Joins per-token transcriptions with single spaces, then attaches punctuation.

    Empty parts still take a slot in the join, so dropped punctuation leaves
    an extra space behind.
    """
    text = " ".join(parts)
    text = _strip_space_before(text, CLOSING_PUNCTUATION)
    text = _strip_space_before(text, CLOSING_BRACKETS)
    return _strip_space_after(text, OPENING_BRACKETS)

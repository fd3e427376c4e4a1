"""Interactive input of the free-text "main difficulties" section."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO


def read_difficulties(stream: TextIO) -> list[str]:
    """Read lines until the first blank line or end of input.

    Args:
        stream: Line-oriented text input, usually stdin.

    Returns:
        The lines read, without line terminators or the closing blank line.
    """
    return list(_until_blank(stream))


def _until_blank(stream: TextIO) -> Iterator[str]:
    for line in stream:
        text = line.rstrip("\r\n")
        if not text.strip():
            return
        yield text

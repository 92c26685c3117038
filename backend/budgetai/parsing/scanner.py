"""Brace-depth scanner that cuts top-level JSON objects out of a character stream."""
from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class ScannerState:
    """Mutable state carried between chunks of one stream."""

    depth: int = 0
    inside_object: bool = False
    buffer: List[str] = field(default_factory=list)


class BraceScanner:
    """
    Incrementally isolates balanced ``{...}`` objects.

    Characters outside an object are dropped, which is what strips prose,
    markdown fences and array punctuation around the objects. Braces inside
    JSON string values are counted like any other brace.

    One scanner belongs to one stream; it is not safe to share.
    """

    def __init__(self):
        self.state = ScannerState()

    @property
    def pending(self) -> bool:
        """True while an unterminated object is being held."""
        return self.state.inside_object

    def feed(self, chunk: str) -> List[str]:
        """
        Scan one chunk and return the objects completed within it.

        Args:
            chunk: Next piece of text, of any size

        Returns:
            Completed objects in the order they closed
        """
        state = self.state
        completed = []
        for char in chunk:
            if char == "{":
                state.depth += 1
                if state.depth == 1 and not state.inside_object:
                    state.inside_object = True
                    state.buffer = []
            elif char == "}":
                if not state.inside_object:
                    # Stray closer before any opener
                    continue
                state.depth -= 1

            if state.inside_object:
                state.buffer.append(char)

            if state.inside_object and char == "}" and state.depth == 0:
                completed.append("".join(state.buffer))
                state.buffer = []
                state.inside_object = False
        return completed

    def reset(self) -> None:
        """Drop any partial object."""
        self.state = ScannerState()


def scan_objects(chunks: Iterable[str]) -> List[str]:
    """Run a fresh scanner over ``chunks`` (or one string) and collect every object."""
    scanner = BraceScanner()
    if isinstance(chunks, str):
        chunks = [chunks]
    objects = []
    for chunk in chunks:
        objects.extend(scanner.feed(chunk))
    return objects

from typing import Callable, Collection, Optional, Sequence

from ninjadiag.core.models import ClassifiedLine


class LineCursor:
    """
    Explicit read position over a sequence of raw lines.

    Only the line under the cursor is classified, and only once, when the
    cursor moves onto it. `current` is None once the lines are exhausted.
    """

    def __init__(self, lines: Sequence[str], classify: Callable[[str], ClassifiedLine]):
        self.lines = lines
        self._classify = classify
        self.position = -1
        self.current: Optional[ClassifiedLine] = None
        self.advance()

    @property
    def done(self) -> bool:
        return self.current is None

    @property
    def kind(self) -> Optional[str]:
        return None if self.current is None else self.current.kind

    def advance(self) -> None:
        self.position += 1
        if self.position < len(self.lines):
            self.current = self._classify(self.lines[self.position])
        else:
            self.position = len(self.lines)
            self.current = None

    def skip_until(self, kinds: Collection[str]) -> bool:
        """Advance until the current line has one of `kinds`. False at end of input."""
        while not self.done and self.kind not in kinds:
            self.advance()
        return not self.done

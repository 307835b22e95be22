"""Line cursor shared by the text parsers."""
from typing import List, Optional


class LineCursor:
    """Forward-only cursor over the trimmed lines of a text blob.

    peek() returns upcoming lines without moving the cursor, which is how the
    parsers implement bounded lookahead.
    """

    def __init__(self, text: str):
        self.lines: List[str] = [line.strip() for line in (text or "").splitlines()]
        self.pos = 0

    def done(self) -> bool:
        return self.pos >= len(self.lines)

    def current(self) -> Optional[str]:
        if self.done():
            return None
        return self.lines[self.pos]

    def advance(self):
        self.pos += 1

    def peek(self, count: int) -> List[str]:
        """Return up to count lines following the current one."""
        start = self.pos + 1
        return self.lines[start:start + count]

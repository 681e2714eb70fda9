"""Splits rendered text into radio-sized messages."""

from dataclasses import dataclass


@dataclass
class MessageSplitter:
    """Packs whole lines into messages of at most ``max_size`` characters."""

    max_size: int = 230

    def split(self, text: str) -> list[str]:
        """
        Split text into messages.

        Lines are kept together where they fit; a single line longer than
        ``max_size`` is cut into pieces, preferring a space as the cut point.

        Args:
            text: The rendered text.

        Returns:
            List of messages, each <= max_size characters. Empty for blank text.
        """
        if self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")

        text = text.strip("\n")
        if not text.strip():
            return []

        messages = []
        current = ""
        for line in text.split("\n"):
            for piece in self._cut(line):
                candidate = f"{current}\n{piece}" if current else piece
                if len(candidate) <= self.max_size:
                    current = candidate
                    continue
                if current:
                    messages.append(current)
                current = piece

        if current:
            messages.append(current)
        return messages

    def _cut(self, line: str) -> list[str]:
        if len(line) <= self.max_size:
            return [line]

        pieces = []
        remaining = line
        while len(remaining) > self.max_size:
            cut = remaining.rfind(" ", 0, self.max_size + 1)
            if cut <= self.max_size // 2:
                cut = self.max_size
            pieces.append(remaining[:cut].rstrip())
            remaining = remaining[cut:].lstrip()
        if remaining:
            pieces.append(remaining)
        return pieces

from __future__ import annotations
from typing import List

class TraceSession:
    """Collects '[Category] message' lines for parse and reward diagnostics."""
    def __init__(self) -> None:
        self.lines: List[str] = []

    def note(self, category: str, message: str) -> None:
        self.lines.append(f"[{category}] {message}")

    def dump(self) -> list[str]:
        return list(self.lines)

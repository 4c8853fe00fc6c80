## fluxo — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os

from .types import WindowRecord
from .context import ExecutionContext
from .parser import normalize_lines
from .interpreter import interpret


NO_OUTPUT = "Script executed successfully (no output)"


class Runtime:
    """Embedding facade: one host window registry, any number of script runs."""

    def __init__(self, windows: list[WindowRecord] | None = None):
        self.windows = windows if windows is not None else []

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, filename: str | None = None, verbosity: int = 0,
            stats: dict | None = None) -> list[str]:
        """Execute `source` and return the transcript; errors propagate to the caller."""
        if os.environ.get('FLUXO_DEBUG'): verbosity = 2
        ctx = ExecutionContext(windows=self.windows, filename=filename)
        return interpret(ctx, normalize_lines(source), verbosity=verbosity, stats=stats)

    def execute(self, source: str) -> str:
        try:
            output = self.run(source)
        except Exception as exc:
            return f"Fluxo Error: {exc}"
        return '\n'.join(output) or NO_OUTPUT

    # Registry ────────────────────────────────────────────────────────────────────────────────
    def add_window(self, record: WindowRecord) -> None:
        self.windows.append(record)

    def get_window(self, window_id: str) -> WindowRecord | None:
        return next((w for w in self.windows if w.id == window_id), None)

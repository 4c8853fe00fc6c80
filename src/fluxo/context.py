## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from dataclasses import dataclass, field

from .types import WindowRecord, ExportedFunction


@dataclass
class ExecutionContext:
    """State for a single `execute` call; only `windows` outlives it."""
    windows: list[WindowRecord]
    variables: dict[str, Any] = field(default_factory=dict)
    exports: dict[str, ExportedFunction] = field(default_factory=dict)
    output: list[str] = field(default_factory=list)
    filename: str | None = None

    def lookup(self, name: str) -> Any:
        return self.variables.get(name)

    def lookup_or_text(self, token: str) -> Any:
        """Variable value, or the token itself when unbound or empty."""
        value = self.variables.get(token)
        return token if value is None or value == '' else value

    def emit(self, text: str) -> None:
        self.output.append(text)

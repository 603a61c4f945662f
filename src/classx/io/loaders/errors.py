"""Input file errors."""

from __future__ import annotations

import os
from typing import List, Optional

from pydantic import ValidationError

from classx.core.errors import ClassXError

# Validation problems shown inline in the one-line message
SUMMARY_LIMIT = 3


class LoaderError(ClassXError, RuntimeError):
    """An input file could not be read or does not have the expected shape."""

    def __init__(self, file_path: str, message: str, *, cause: Optional[Exception] = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    @property
    def details(self) -> List[str]:
        """One ``location: problem`` line per pydantic error, or the cause itself."""
        if isinstance(self.cause, ValidationError):
            return [
                f"{'.'.join(str(part) for part in err.get('loc', ())) or '<root>'}: {err.get('msg') or err.get('type')}"
                for err in self.cause.errors()
            ]
        return [str(self.cause)] if self.cause else []

    def __str__(self) -> str:
        try:
            shown = os.path.relpath(self.file_path)
        except ValueError:  # pragma: no cover - different drive on Windows
            shown = self.file_path
        base = f"{self.message} ({shown})"
        details = self.details
        if not details:
            return base
        summary = details[:SUMMARY_LIMIT]
        if len(details) > SUMMARY_LIMIT:
            summary.append(f"... ({len(details) - SUMMARY_LIMIT} more)")
        return f"{base}: {'; '.join(summary)}"

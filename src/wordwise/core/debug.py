"""Debug-gated diagnostics and the optional generation log."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from wordwise.core.models import PluginSettings

log = logging.getLogger(__name__)


def debug_log(settings: PluginSettings, message: str, *args: object) -> None:
    """Log a progress message only when debug mode is on."""
    if settings.debug_mode:
        log.info(message, *args)


class GenerationLog:
    """Append-only JSON Lines record of successful generations."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append(
        self,
        *,
        command: str,
        provider: str,
        model: str,
        input_text: str,
        output_text: str,
        elapsed: float,
    ) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "provider": provider,
            "model": model,
            "input": input_text,
            "output": output_text,
            "elapsed_seconds": round(elapsed, 2),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    def read(self) -> list[dict]:
        """Return all records, oldest first. Missing file means no records."""
        if not self._path.exists():
            return []
        lines = self._path.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line.strip()]

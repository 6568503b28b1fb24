from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

LAST_WEBHOOK_FILE = "last_webhook.json"
HISTORY_FILE = "webhooks_history.json"


class WebhookSnapshot(BaseModel):
    receivedAt: datetime
    body: object = None


class WebhookSnapshotStore:
    """Diagnostic copies of the most recent raw webhook payloads.

    Writes are not locked; concurrent requests may interleave.
    """

    def __init__(
        self,
        directory: str | Path,
        max_entries: int = 3,
        log: logging.Logger | None = None,
    ) -> None:
        self._dir = Path(directory)
        self._max_entries = max_entries
        self._log = log or logger

    @property
    def last_path(self) -> Path:
        return self._dir / LAST_WEBHOOK_FILE

    @property
    def history_path(self) -> Path:
        return self._dir / HISTORY_FILE

    def load_history(self) -> list[WebhookSnapshot]:
        try:
            raw = json.loads(self.history_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError):
            self._log.warning("Unreadable snapshot history at %s, starting fresh", self.history_path)
            return []
        if not isinstance(raw, list):
            return []
        try:
            return [WebhookSnapshot.model_validate(entry) for entry in raw]
        except ValidationError:
            self._log.warning("Malformed snapshot history at %s, starting fresh", self.history_path)
            return []

    def record(self, body: object) -> WebhookSnapshot:
        snapshot = WebhookSnapshot(receivedAt=datetime.now(timezone.utc), body=body)

        history = self.load_history()
        history.append(snapshot)
        # Oldest entries are dropped first
        history = history[-self._max_entries:] if self._max_entries > 0 else []

        self._dir.mkdir(parents=True, exist_ok=True)
        self.last_path.write_text(
            json.dumps(body, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        self.history_path.write_text(
            json.dumps([s.model_dump(mode="json") for s in history], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        return snapshot

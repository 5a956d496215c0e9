"""In-process collaborators, used when no database is configured."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from backend.models.scenario import (
    ScenarioInput,
    ScenarioResult,
    ScenarioSummary,
)

from .base import LeadCapture, ScenarioStore


class InMemoryScenarioStore(ScenarioStore):
    """Keeps scenarios as serialized JSON snapshots in a dict.

    Thread-safe; ids are assigned sequentially from 1.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: dict[int, dict[str, object]] = {}
        self._next_id = 1

    def save(
        self,
        scenario_name: str,
        input_data: ScenarioInput,
        result_data: ScenarioResult,
    ) -> int:
        row = {
            "scenario_name": scenario_name,
            "input_data": input_data.model_dump_json(),
            "result_data": result_data.model_dump_json(),
            "created_at": datetime.now(tz=timezone.utc),
        }
        with self._lock:
            scenario_id = self._next_id
            self._next_id += 1
            self._rows[scenario_id] = {"id": scenario_id, **row}
        return scenario_id

    def list_scenarios(self) -> list[ScenarioSummary]:
        with self._lock:
            rows = list(self._rows.values())
        rows.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [
            ScenarioSummary(
                id=r["id"], scenario_name=r["scenario_name"], created_at=r["created_at"]
            )
            for r in rows
        ]


class InMemoryLeadCapture(LeadCapture):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.emails: list[str] = []

    def record(self, email: str) -> None:
        with self._lock:
            self.emails.append(email)

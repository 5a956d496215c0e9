"""Supabase-backed collaborators.

Expects two tables:
- ``scenarios(id, scenario_name, input_data, result_data, created_at)`` with
  ``input_data``/``result_data`` holding JSON text
- ``leads(id, email, created_at)``
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client, create_client

from backend.config.settings import Settings
from backend.models.errors import CaptureUnavailableError, StoreUnavailableError
from backend.models.scenario import ScenarioInput, ScenarioResult, ScenarioSummary

from .base import LeadCapture, ScenarioStore

logger = logging.getLogger(__name__)

SCENARIOS_TABLE = "scenarios"
LEADS_TABLE = "leads"


def create_supabase_client(settings: Settings) -> Client:
    return create_client(settings.supabase_url, settings.supabase_key)


class SupabaseScenarioStore(ScenarioStore):
    def __init__(self, client: Optional[Any] = None, settings: Optional[Settings] = None):
        self._client = client or create_supabase_client(settings or Settings())

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
        }
        try:
            res = self._client.table(SCENARIOS_TABLE).insert(row).execute()
        except Exception as e:
            logger.exception("Failed to save scenario '%s'", scenario_name)
            raise StoreUnavailableError(f"Failed to save scenario: {e}") from e
        if not res.data:
            raise StoreUnavailableError("Scenario insert returned no row")
        return res.data[0]["id"]

    def list_scenarios(self) -> list[ScenarioSummary]:
        try:
            res = (
                self._client.table(SCENARIOS_TABLE)
                .select("id, scenario_name, created_at")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.exception("Failed to list scenarios")
            raise StoreUnavailableError(f"Failed to retrieve scenarios: {e}") from e
        return [ScenarioSummary.model_validate(row) for row in res.data or []]


class SupabaseLeadCapture(LeadCapture):
    def __init__(self, client: Optional[Any] = None, settings: Optional[Settings] = None):
        self._client = client or create_supabase_client(settings or Settings())

    def record(self, email: str) -> None:
        try:
            self._client.table(LEADS_TABLE).insert({"email": email}).execute()
        except Exception as e:
            raise CaptureUnavailableError(f"Failed to save lead: {e}") from e

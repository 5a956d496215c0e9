"""Scenario storage and lead capture."""

from __future__ import annotations

import logging
from typing import Optional

from backend.config.settings import Settings
from backend.models.errors import ROIError

from .base import LeadCapture, ScenarioStore
from .memory import InMemoryLeadCapture, InMemoryScenarioStore

logger = logging.getLogger(__name__)


def get_scenario_store(settings: Optional[Settings] = None) -> ScenarioStore:
    """Supabase when credentials are configured, otherwise in-memory."""
    settings = settings or Settings()
    if settings.supabase_configured:
        from .supabase_store import SupabaseScenarioStore

        return SupabaseScenarioStore(settings=settings)
    logger.info("Supabase not configured; scenarios are kept in memory")
    return InMemoryScenarioStore()


def get_lead_capture(settings: Optional[Settings] = None) -> LeadCapture:
    settings = settings or Settings()
    if settings.supabase_configured:
        from .supabase_store import SupabaseLeadCapture

        return SupabaseLeadCapture(settings=settings)
    return InMemoryLeadCapture()


def capture_lead_best_effort(capture: LeadCapture, email: str) -> bool:
    """Record a lead without ever blocking the caller.

    Returns False (and logs) when the capture failed.
    """
    try:
        capture.record(email)
    except ROIError as e:
        logger.warning("Failed to save lead: %s", e)
        return False
    except Exception:
        logger.exception("Unexpected error while saving lead")
        return False
    return True


__all__ = [
    "ScenarioStore",
    "LeadCapture",
    "InMemoryScenarioStore",
    "InMemoryLeadCapture",
    "get_scenario_store",
    "get_lead_capture",
    "capture_lead_best_effort",
]

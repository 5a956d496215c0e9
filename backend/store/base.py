"""Collaborator interfaces: where scenarios are kept and leads are recorded."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backend.models.scenario import ScenarioInput, ScenarioResult, ScenarioSummary


class ScenarioStore(ABC):
    """Abstract base for saved-scenario storage."""

    @abstractmethod
    def save(
        self,
        scenario_name: str,
        input_data: ScenarioInput,
        result_data: ScenarioResult,
    ) -> int:
        """Persist a snapshot of the scenario and return its new id."""
        ...

    @abstractmethod
    def list_scenarios(self) -> list[ScenarioSummary]:
        """Return saved scenarios, newest first."""
        ...


class LeadCapture(ABC):
    """Abstract base for recording report-requester emails."""

    @abstractmethod
    def record(self, email: str) -> None:
        ...

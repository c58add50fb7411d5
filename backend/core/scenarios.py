"""Named scenarios persisted as one flat JSON list."""

from __future__ import annotations

import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from backend.schemas.calc import CalcInputs
from backend.schemas.scenario import Scenario

logger = logging.getLogger(__name__)

# records are checked one by one so a single bad entry does not hide the rest
_RECORD_LIST = TypeAdapter(List[Any])

_UNSET: Any = object()


class ScenarioNotFoundError(LookupError):
    def __init__(self, scenario_id: str):
        super().__init__(f"scenario not found: {scenario_id}")
        self.scenario_id = scenario_id


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ScenarioStore:
    """
    File-backed scenario list.

    The whole list is read and rewritten on every change; it is small and
    edited by hand, so there is no need for anything finer grained.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[Scenario]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_bytes()
            records = _RECORD_LIST.validate_json(raw) if raw.strip() else []
        except (OSError, ValidationError) as exc:
            # unreadable storage behaves like an empty list
            logger.warning("ignoring unreadable scenario store %s: %s", self.path, exc)
            return []

        scenarios: List[Scenario] = []
        for index, record in enumerate(records):
            try:
                scenarios.append(Scenario.model_validate(record))
            except ValidationError as exc:
                logger.warning(
                    "skipping invalid scenario #%d (id=%s) in %s: %s",
                    index,
                    record.get("id") if isinstance(record, dict) else None,
                    self.path,
                    exc.errors(include_url=False),
                )
        return scenarios

    def _write(self, scenarios: List[Scenario]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = [scenario.model_dump(mode="json") for scenario in scenarios]
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def list_scenarios(self) -> List[Scenario]:
        with self._lock:
            return self._load()

    def get_scenario(self, scenario_id: str) -> Scenario:
        with self._lock:
            for scenario in self._load():
                if scenario.id == scenario_id:
                    return scenario
        raise ScenarioNotFoundError(scenario_id)

    def save_scenario(
        self,
        name: str,
        inputs: CalcInputs,
        target_today: Optional[float] = None,
        preset_name: Optional[str] = None,
    ) -> Scenario:
        now = _now()
        scenario = Scenario(
            id=str(uuid.uuid4()),
            name=name.strip() or "Untitled",
            inputs=inputs,
            createdAt=now,
            updatedAt=now,
            targetToday=target_today,
            presetName=preset_name,
        )
        with self._lock:
            scenarios = self._load()
            scenarios.append(scenario)
            self._write(scenarios)
        logger.info("saved scenario id=%s name=%r", scenario.id, scenario.name)
        return scenario

    def update_scenario(
        self,
        scenario_id: str,
        name: Optional[str] = None,
        inputs: Optional[CalcInputs] = None,
        target_today: Optional[float] = _UNSET,
        preset_name: Optional[str] = _UNSET,
    ) -> Scenario:
        """
        Apply a partial update. `name` and `inputs` are left alone when None;
        `target_today` and `preset_name` are cleared by passing None and left
        alone when omitted.
        """
        changes = {"updatedAt": _now()}
        if name is not None:
            changes["name"] = name.strip() or "Untitled"
        if inputs is not None:
            changes["inputs"] = inputs
        if target_today is not _UNSET:
            changes["targetToday"] = target_today
        if preset_name is not _UNSET:
            changes["presetName"] = preset_name

        with self._lock:
            scenarios = self._load()
            for index, scenario in enumerate(scenarios):
                if scenario.id == scenario_id:
                    updated = scenario.model_copy(update=changes)
                    scenarios[index] = updated
                    self._write(scenarios)
                    return updated
        raise ScenarioNotFoundError(scenario_id)

    def delete_scenario(self, scenario_id: str) -> None:
        with self._lock:
            scenarios = self._load()
            remaining = [s for s in scenarios if s.id != scenario_id]
            if len(remaining) == len(scenarios):
                raise ScenarioNotFoundError(scenario_id)
            self._write(remaining)
        logger.info("deleted scenario id=%s", scenario_id)

    def duplicate_scenario(self, scenario_id: str) -> Scenario:
        now = _now()
        with self._lock:
            scenarios = self._load()
            source = next((s for s in scenarios if s.id == scenario_id), None)
            if source is None:
                raise ScenarioNotFoundError(scenario_id)
            copy = source.model_copy(
                update={
                    "id": str(uuid.uuid4()),
                    "name": f"{source.name} (Copy)",
                    "createdAt": now,
                    "updatedAt": now,
                }
            )
            scenarios.append(copy)
            self._write(scenarios)
        return copy

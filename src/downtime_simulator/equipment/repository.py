"""Equipment collaborator — where the engine gets its read-only asset snapshot.

Storage is owned elsewhere; the engine only needs ``get(equipment_id)``.
Two implementations ship here: a dict-backed store (tests, embedding) and a
loader for YAML snapshot files used by the HTTP service::

    equipment:
      - id: "cnc-01"
        name: "CNC Mill"
        criticality: 8
        value: 50000
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import yaml

from downtime_simulator.config.equipment import EquipmentSnapshot
from downtime_simulator.errors import InvalidInputError

logger = logging.getLogger(__name__)


class EquipmentRepository(Protocol):
    """Read-only lookup of equipment snapshots."""

    def get(self, equipment_id: str) -> EquipmentSnapshot | None:
        ...


class InMemoryEquipmentRepository:
    """Dict-backed :class:`EquipmentRepository`."""

    def __init__(self, items: Iterable[EquipmentSnapshot] = ()) -> None:
        self._items: dict[str, EquipmentSnapshot] = {}
        for item in items:
            self.add(item)

    def add(self, snapshot: EquipmentSnapshot) -> None:
        self._items[snapshot.id] = snapshot

    def get(self, equipment_id: str) -> EquipmentSnapshot | None:
        return self._items.get(str(equipment_id))

    def __len__(self) -> int:
        return len(self._items)


def load_equipment_yaml(path: str | Path) -> InMemoryEquipmentRepository:
    """Load an equipment snapshot file into an in-memory repository.

    Accepts either a top-level ``equipment:`` list or a bare list.
    """
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("equipment", [])
    if not isinstance(data, list):
        raise InvalidInputError(f"{path}: expected a list of equipment records")

    # ids may be written as bare integers in YAML
    repo = InMemoryEquipmentRepository(
        EquipmentSnapshot(**{**record, "id": str(record["id"])}) for record in data
    )
    logger.info("Loaded %d equipment records from %s", len(repo), path)
    return repo

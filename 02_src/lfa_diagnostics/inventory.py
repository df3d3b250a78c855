"""Master inventory catalog of stakeholders, interventions and indicators."""

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .errors import InvalidInput
from .graph_builder import normalize_cost_level

ITEM_STAKEHOLDER = "stakeholder"
ITEM_INTERVENTION = "intervention"
ITEM_INDICATOR = "indicator"


@dataclass(frozen=True)
class StakeholderItem:
    id: str
    label: str
    bandwidth: float
    influence: float
    level: str
    theme: str = "GENERAL"
    description: str = ""
    required_for_scale: Optional[int] = None
    type: str = ITEM_STAKEHOLDER


@dataclass(frozen=True)
class InterventionItem:
    id: str
    label: str
    cost_level: str
    complexity: float
    category: str
    theme: str = "GENERAL"
    description: str = ""
    recommended_role: Optional[str] = None
    type: str = ITEM_INTERVENTION


@dataclass(frozen=True)
class IndicatorItem:
    id: str
    label: str
    measure_type: str
    unit: str
    theme: str = "GENERAL"
    description: str = ""
    type: str = ITEM_INDICATOR


InventoryItem = Union[StakeholderItem, InterventionItem, IndicatorItem]


class InventoryCatalog:
    """Read-only lookup of inventory items by id."""

    def __init__(self, items: Iterable[InventoryItem] = ()) -> None:
        self._items: Dict[str, InventoryItem] = {}
        for item in items:
            if item.id in self._items:
                raise InvalidInput(f"Duplicate inventory id: {item.id}")
            self._items[item.id] = item

    def get(self, item_id: str) -> Optional[InventoryItem]:
        return self._items.get(item_id)

    def stakeholders(self) -> List[StakeholderItem]:
        return [item for item in self._items.values() if isinstance(item, StakeholderItem)]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "InventoryCatalog":
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
            raise InvalidInput("Inventory records must be a list of objects")
        return cls(item_from_record(record) for record in records)

    @classmethod
    def from_json_file(cls, path: Path) -> "InventoryCatalog":
        payload = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(payload, Mapping):
            payload = payload.get("items", [])
        return cls.from_records(payload)


def item_from_record(record: Any) -> InventoryItem:
    if not isinstance(record, Mapping):
        raise InvalidInput("Inventory record must be an object")
    item_type = record.get("type")
    item_id = record.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise InvalidInput("Inventory record id must be a non-empty string")
    where = f"inventory[{item_id}]"
    common = {
        "id": item_id,
        "label": str(record.get("label", item_id)),
        "theme": str(record.get("theme", "GENERAL")),
        "description": str(record.get("description", "")),
    }
    try:
        if item_type == ITEM_STAKEHOLDER:
            required = record.get("required_for_scale")
            return StakeholderItem(
                bandwidth=_number(record["bandwidth"], f"{where}.bandwidth"),
                influence=_number(record["influence"], f"{where}.influence"),
                level=str(record["level"]),
                required_for_scale=(
                    int(_number(required, f"{where}.required_for_scale")) if required is not None else None
                ),
                **common,
            )
        if item_type == ITEM_INTERVENTION:
            return InterventionItem(
                cost_level=normalize_cost_level(record["cost_level"], f"{where}.cost_level"),
                complexity=_number(record["complexity"], f"{where}.complexity"),
                category=str(record["category"]),
                recommended_role=record.get("recommended_role"),
                **common,
            )
        if item_type == ITEM_INDICATOR:
            return IndicatorItem(
                measure_type=str(record["measureType"]),
                unit=str(record["unit"]),
                **common,
            )
    except KeyError as error:
        raise InvalidInput(f"{where} is missing required attribute {error.args[0]!r}") from error
    raise InvalidInput(f"{where}.type must be stakeholder, intervention or indicator, got {item_type!r}")


def load_default_catalog() -> InventoryCatalog:
    raw = resources.files("lfa_diagnostics").joinpath("data/default_inventory.json").read_text(encoding="utf-8")
    return InventoryCatalog.from_records(json.loads(raw)["items"])


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{where} must be a number, got {value!r}")
    return value

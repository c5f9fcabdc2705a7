"""
Seating chart definition.

Charts arrive as loosely shaped dicts (admin forms, seed files, stored
documents). `SeatingChart.from_dict` is the single load path: it applies the
defaulting rules and rejects malformed tiers, sections and rows up front.

Defaults:
- row `offset` -> 0
- row `row_label` -> row id up to the first "-"
- section `ticket_type` -> section name
- section render metadata -> class_name '', angle 0.0, translate_x 0.0
"""

from typing import Any, Optional

import attrs

from src.service.box_office.domain.box_office_errors import SeatingChartError
from src.service.box_office.domain.value_object.seat_identity import (
    SPACER_ROW_ID,
    derive_row_label,
)


@attrs.define(frozen=True)
class Row:
    row_id: str
    seats: int = 0
    offset: int = 0
    row_label: Optional[str] = None

    @property
    def is_spacer(self) -> bool:
        return self.row_id == SPACER_ROW_ID

    @property
    def label(self) -> str:
        return self.row_label or derive_row_label(self.row_id)

    @property
    def seat_range(self) -> range:
        return range(self.offset + 1, self.offset + self.seats + 1)


@attrs.define(frozen=True)
class Section:
    name: str
    price: int
    rows: tuple[Row, ...]
    ticket_type: str = ''
    # Render metadata, carried for the seat-map view and never interpreted here
    class_name: str = ''
    angle: float = 0.0
    translate_x: float = 0.0


@attrs.define(frozen=True)
class Tier:
    name: str
    sections: tuple[Section, ...]


@attrs.define(frozen=True)
class SeatingChart:
    tiers: tuple[Tier, ...]

    @property
    def sections(self) -> list[Section]:
        return [section for tier in self.tiers for section in tier.sections]

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def get_section(self, name: str) -> Optional[Section]:
        return next((section for section in self.sections if section.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return attrs.asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> 'SeatingChart':
        if not isinstance(data, dict):
            raise SeatingChartError('Seating chart must be an object')
        raw_tiers = data.get('tiers')
        if not isinstance(raw_tiers, list) or not raw_tiers:
            raise SeatingChartError('Seating chart must have at least one tier')

        tiers = tuple(_load_tier(raw, index) for index, raw in enumerate(raw_tiers))

        seen: set[str] = set()
        for tier in tiers:
            for section in tier.sections:
                if section.name in seen:
                    raise SeatingChartError(f'Duplicate section name: {section.name}')
                seen.add(section.name)
        return cls(tiers=tiers)


def _require_str(raw: dict[str, Any], field: str, where: str) -> str:
    value = raw.get(field)
    if not isinstance(value, str) or not value.strip():
        raise SeatingChartError(f'{where}: "{field}" must be a non-empty string')
    return value.strip()


def _optional_int(
    raw: dict[str, Any], field: str, where: str, *, default: int, minimum: int
) -> int:
    value = raw.get(field)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise SeatingChartError(f'{where}: "{field}" must be an integer >= {minimum}')
    return value


def _require_int(raw: dict[str, Any], field: str, where: str, *, minimum: int) -> int:
    if raw.get(field) is None:
        raise SeatingChartError(f'{where}: "{field}" is required')
    return _optional_int(raw, field, where, default=minimum, minimum=minimum)


def _optional_float(raw: dict[str, Any], field: str, where: str) -> float:
    value = raw.get(field)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SeatingChartError(f'{where}: "{field}" must be a number')
    return float(value)


def _load_tier(raw: Any, index: int) -> Tier:
    where = f'tier #{index + 1}'
    if not isinstance(raw, dict):
        raise SeatingChartError(f'{where} must be an object')
    name = _require_str(raw, 'name', where)
    raw_sections = raw.get('sections')
    if not isinstance(raw_sections, list) or not raw_sections:
        raise SeatingChartError(f'tier {name}: must have at least one section')
    return Tier(
        name=name,
        sections=tuple(_load_section(section, name) for section in raw_sections),
    )


def _load_section(raw: Any, tier_name: str) -> Section:
    if not isinstance(raw, dict):
        raise SeatingChartError(f'tier {tier_name}: section must be an object')
    name = _require_str(raw, 'name', f'tier {tier_name}')
    where = f'section {name}'
    raw_rows = raw.get('rows')
    if not isinstance(raw_rows, list) or not raw_rows:
        raise SeatingChartError(f'{where}: must have at least one row')
    rows = tuple(_load_row(row, where) for row in raw_rows)
    if all(row.is_spacer for row in rows):
        raise SeatingChartError(f'{where}: must have at least one seated row')

    ticket_type = raw.get('ticket_type') or name
    if not isinstance(ticket_type, str):
        raise SeatingChartError(f'{where}: "ticket_type" must be a string')
    class_name = raw.get('class_name') or ''
    if not isinstance(class_name, str):
        raise SeatingChartError(f'{where}: "class_name" must be a string')

    return Section(
        name=name,
        price=_require_int(raw, 'price', where, minimum=0),
        rows=rows,
        ticket_type=ticket_type,
        class_name=class_name,
        angle=_optional_float(raw, 'angle', where),
        translate_x=_optional_float(raw, 'translate_x', where),
    )


def _load_row(raw: Any, where: str) -> Row:
    if not isinstance(raw, dict):
        raise SeatingChartError(f'{where}: row must be an object')
    row_id = _require_str(raw, 'row_id', where)
    if row_id == SPACER_ROW_ID:
        return Row(row_id=SPACER_ROW_ID)

    seats = _require_int(raw, 'seats', f'{where} row {row_id}', minimum=1)
    offset = _optional_int(raw, 'offset', f'{where} row {row_id}', default=0, minimum=0)

    row_label = raw.get('row_label')
    if row_label is not None and (not isinstance(row_label, str) or not row_label.strip()):
        raise SeatingChartError(f'{where}: row {row_id} "row_label" must be a non-empty string')

    return Row(
        row_id=row_id,
        seats=seats,
        offset=offset,
        row_label=row_label.strip() if row_label else None,
    )

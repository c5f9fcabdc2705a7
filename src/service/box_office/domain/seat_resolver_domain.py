"""
Seat Identity Resolver

Expands a seating chart into the ordered seat identities each row contributes.
Pure domain logic: no store, no settings.
"""

from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.box_office_errors import SeatingChartIntegrityError
from src.service.box_office.domain.entity.seating_chart_entity import Row, SeatingChart, Section
from src.service.box_office.domain.value_object.seat_identity import SeatIdentity, split_seat_key


@attrs.define(frozen=True)
class ResolvedRow:
    tier_name: str
    section: Section
    row: Row
    seats: tuple[SeatIdentity, ...]


def group_rows_by_label(section: Section) -> dict[str, list[Row]]:
    """Display label -> physical row-parts in chart order. Spacers carry no label."""
    grouped: dict[str, list[Row]] = {}
    for row in section.rows:
        if row.is_spacer:
            continue
        grouped.setdefault(row.label, []).append(row)
    return grouped


def _check_row_parts(section: Section) -> None:
    for label, parts in group_rows_by_label(section).items():
        ordered = sorted(parts, key=lambda row: row.offset)
        for previous, current in zip(ordered, ordered[1:]):
            if current.offset < previous.offset + previous.seats:
                raise SeatingChartIntegrityError(
                    f'Row-parts {previous.row_id} and {current.row_id} overlap '
                    f'in section {section.name}, row {label}',
                    section_name=section.name,
                    row_label=label,
                )


@Logger.io(truncate_content=True)
def resolve_rows(chart: SeatingChart) -> list[ResolvedRow]:
    resolved: list[ResolvedRow] = []
    seen_keys: set[str] = set()
    for tier in chart.tiers:
        for section in tier.sections:
            _check_row_parts(section)
            for row in section.rows:
                if row.is_spacer:
                    continue
                seats = tuple(
                    SeatIdentity(
                        section_name=section.name,
                        row_id=row.row_id,
                        row_label=row.label,
                        seat_number=number,
                    )
                    for number in row.seat_range
                )
                keys = {seat.key for seat in seats}
                if duplicated := keys & seen_keys:
                    raise SeatingChartIntegrityError(
                        f'Duplicate seat identities in section {section.name}: '
                        f'{", ".join(sorted(duplicated))}',
                        section_name=section.name,
                        row_label=row.label,
                    )
                seen_keys |= keys
                resolved.append(
                    ResolvedRow(tier_name=tier.name, section=section, row=row, seats=seats)
                )
    return resolved


def resolve(chart: SeatingChart) -> list[SeatIdentity]:
    return [seat for resolved_row in resolve_rows(chart) for seat in resolved_row.seats]


def find_seat(chart: SeatingChart, key: str) -> Optional[SeatIdentity]:
    if (parts := split_seat_key(key, section_names=chart.section_names)) is None:
        return None
    section_name, row_id, seat_number = parts
    section = chart.get_section(section_name)
    if section is None:
        return None
    for row in section.rows:
        if row.row_id == row_id and seat_number in row.seat_range:
            return SeatIdentity(
                section_name=section_name,
                row_id=row_id,
                row_label=row.label,
                seat_number=seat_number,
            )
    return None


def price_of(chart: SeatingChart, key: str) -> int:
    seat = find_seat(chart, key)
    section = chart.get_section(seat.section_name) if seat else None
    if seat is None or section is None:
        raise ValidationError(f'Unknown seat: {key}')
    return section.price

"""
Chart series shaping.

Calculators return typed results; the charting layer wants flat rows of
numbers keyed by field name. This module is the adapter between the two and
carries no business logic.
"""

from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from .generations import GenerationStep
from .projection import ProjectionPoint

FieldSpec = Union[Sequence[str], Mapping[str, str]]


def _field_value(point: Any, field: str) -> Any:
    if isinstance(point, Mapping):
        return point[field]
    return getattr(point, field)


def _field_mapping(fields: FieldSpec) -> Dict[str, str]:
    if isinstance(fields, Mapping):
        return dict(fields)
    return {field: field for field in fields}


def to_chart_series(
    points: Iterable[Any], x_field: str, y_fields: FieldSpec
) -> List[Dict[str, float]]:
    """
    Flatten points into chart rows.

    Args:
        points: Pydantic models or mappings
        x_field: Field used for the x-axis
        y_fields: Fields to plot, or a mapping of source field to row key

    Returns:
        One row per point; y fields whose value is None are omitted
    """
    mapping = _field_mapping(y_fields)
    rows = []
    for point in points:
        row = {x_field: _field_value(point, x_field)}
        for source, key in mapping.items():
            value = _field_value(point, source)
            if value is not None:
                row[key] = value
        rows.append(row)
    return rows


def overlay_series(
    comparison: Mapping[str, Sequence[ProjectionPoint]],
    x_field: str = "period",
    y_field: str = "nominal_value",
) -> List[Dict[str, float]]:
    """
    Merge scenario series into one row per x value.

    Each row carries the x value plus one key per scenario label.
    """
    rows: Dict[Any, Dict[str, float]] = {}
    for label, points in comparison.items():
        for point in points:
            x = _field_value(point, x_field)
            row = rows.setdefault(x, {x_field: x})
            value = _field_value(point, y_field)
            if value is not None:
                row[label] = value
    return list(rows.values())


def generation_rows(steps: Iterable[GenerationStep]) -> List[Dict[str, float]]:
    return to_chart_series(
        steps,
        "years_elapsed",
        {
            "nominal_value": "nominal",
            "real_value_retained": "real",
            "inflation_loss": "inflationLoss",
            "healthcare_loss": "healthcareLoss",
        },
    )

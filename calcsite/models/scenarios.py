"""Side-by-side projections under alternative growth rates."""

from typing import Dict, List, Mapping, Optional, Sequence, Union

from .projection import ProjectionInput, ProjectionPoint, final_value, project

DEFAULT_SCENARIOS: Dict[str, float] = {
    "conservative": -2.0,
    "current": 0.0,
    "aggressive": 2.0,
}

ScenarioDeltas = Union[Mapping[str, float], Sequence[float]]

# A rate below -100% would turn a positive value negative
MIN_RATE_PERCENT = -100.0


def delta_label(delta: float) -> str:
    """Label a rate offset, e.g. ``rate-2%`` or ``rate+0%``."""
    return f"rate{delta:+g}%"


def _labelled_deltas(deltas: Optional[ScenarioDeltas]) -> Dict[str, float]:
    if deltas is None:
        return dict(DEFAULT_SCENARIOS)
    if isinstance(deltas, Mapping):
        return dict(deltas)
    return {delta_label(delta): delta for delta in deltas}


def scenario_rates(
    base_rate_percent: float, deltas: Optional[ScenarioDeltas] = None
) -> Dict[str, float]:
    """Offset rate of each scenario, before flooring at MIN_RATE_PERCENT."""
    return {
        label: base_rate_percent + delta
        for label, delta in _labelled_deltas(deltas).items()
    }


def compare_scenarios(
    base: ProjectionInput, deltas: Optional[ScenarioDeltas] = None
) -> Dict[str, List[ProjectionPoint]]:
    """
    Project the same input under several rate offsets.

    Every series covers the same periods, so all of them have
    ``base.periods + 1`` points and line up on a shared x-axis.

    Args:
        base: Projection whose annual rate is offset per scenario
        deltas: Offsets in percentage points, either a sequence (labelled
            ``rate-2%``, ``rate+0%``...) or a mapping of label to offset.
            Defaults to conservative/current/aggressive at -2/0/+2.
            Offset rates are floored at -100%, where the value is wiped out.

    Returns:
        Mapping of scenario label to projection series, in input order
    """
    return {
        label: project(
            base.base_value,
            max(MIN_RATE_PERCENT, rate),
            base.periods,
            deflator_rate_percent=base.deflator_rate_percent,
            compounding_unit=base.compounding_unit,
        )
        for label, rate in scenario_rates(base.annual_rate_percent, deltas).items()
    }


def scenario_endpoints(comparison: Mapping[str, List[ProjectionPoint]]) -> Dict[str, float]:
    """Final nominal value of each scenario."""
    return {label: final_value(points) for label, points in comparison.items()}

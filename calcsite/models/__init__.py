"""Projection engine: pure calculators over validated numeric inputs."""

from .amortization import (
    AmortizationResult,
    LoanInput,
    LoanResult,
    OwnershipCosts,
    PaymentBreakdown,
    amortization_schedule,
    amortize,
    calculate_loan,
    ownership_costs,
)
from .deflation import AssetPurchasingPower, asset_purchasing_power
from .generations import (
    GenerationStep,
    LegacyPlan,
    plan_legacy,
    project_generations,
)
from .projection import (
    ProjectionInput,
    ProjectionPoint,
    cagr,
    final_value,
    project,
    project_input,
)
from .retirement import (
    RetirementInput,
    RetirementProjection,
    generation_from_age,
    project_retirement,
)
from .rate_tables import (
    DEFAULT_RATE_TABLES,
    RateTableLookupError,
    RateTables,
    get_rate_tables,
    load_rate_tables,
)
from .scenarios import DEFAULT_SCENARIOS, compare_scenarios, scenario_endpoints
from .series import generation_rows, overlay_series, to_chart_series

__all__ = [
    "AmortizationResult",
    "LoanInput",
    "LoanResult",
    "OwnershipCosts",
    "PaymentBreakdown",
    "amortization_schedule",
    "amortize",
    "calculate_loan",
    "ownership_costs",
    "AssetPurchasingPower",
    "asset_purchasing_power",
    "GenerationStep",
    "LegacyPlan",
    "plan_legacy",
    "project_generations",
    "ProjectionInput",
    "ProjectionPoint",
    "cagr",
    "final_value",
    "project",
    "project_input",
    "RetirementInput",
    "RetirementProjection",
    "generation_from_age",
    "project_retirement",
    "DEFAULT_RATE_TABLES",
    "RateTableLookupError",
    "RateTables",
    "get_rate_tables",
    "load_rate_tables",
    "DEFAULT_SCENARIOS",
    "compare_scenarios",
    "scenario_endpoints",
    "generation_rows",
    "overlay_series",
    "to_chart_series",
]

"""
Calculator blueprint.

Each endpoint validates its form, runs the matching engine calculation and
returns the typed result together with chart-ready rows.
"""

from typing import Any, Type, TypeVar

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from calcsite.models.amortization import (
    LoanInput,
    amortization_schedule,
    amortize,
    calculate_loan,
    ownership_costs,
)
from calcsite.models.deflation import asset_purchasing_power_between, asset_value_history
from calcsite.models.generations import plan_legacy
from calcsite.models.household import budget_50_30_20, emergency_fund
from calcsite.models.insurance import project_premium
from calcsite.models.ppp import convert_between_countries
from calcsite.models.projection import final_value, project_input, salary_adjustment
from calcsite.models.rate_tables import RateTableLookupError, get_rate_tables
from calcsite.models.retirement import project_retirement, savings_trajectory
from calcsite.models.roi import analyze_roi
from calcsite.models.scenarios import compare_scenarios, scenario_endpoints
from calcsite.models.series import generation_rows, overlay_series, to_chart_series
from calcsite.models.student_loan import calculate_student_loan

from .forms import (
    BENCHMARK_TREASURY_KEYS,
    AmortizationForm,
    AutoLoanForm,
    BudgetForm,
    CalculatorForm,
    DeflationForm,
    EmergencyFundForm,
    InsuranceForm,
    LegacyForm,
    PPPForm,
    ProjectionForm,
    RetirementForm,
    ROIForm,
    SalaryForm,
    ScenarioForm,
    StudentLoanForm,
)

calculators_bp = Blueprint("calculators", __name__, url_prefix="/api")

FormT = TypeVar("FormT", bound=CalculatorForm)


def _parse_form(form_cls: Type[FormT]) -> FormT:
    """Validate the JSON request body against a form model."""
    data = request.get_json(silent=True) or {}
    return form_cls.model_validate(data)


@calculators_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError) -> Any:
    return (
        jsonify(
            {
                "error": "Invalid input",
                "details": e.errors(include_url=False, include_context=False),
            }
        ),
        400,
    )


@calculators_bp.errorhandler(RateTableLookupError)
def handle_lookup_error(e: RateTableLookupError) -> Any:
    return jsonify({"error": "Unknown reference data key", "message": e.args[0]}), 400


@calculators_bp.errorhandler(ValueError)
def handle_value_error(e: ValueError) -> Any:
    return jsonify({"error": "Invalid input", "message": str(e)}), 400


@calculators_bp.errorhandler(Exception)
def handle_unexpected_error(e: Exception) -> Any:
    if isinstance(e, HTTPException):
        return e
    current_app.logger.error(f"Error running calculator {request.path}: {str(e)}")
    return jsonify({"error": "Internal server error"}), 500


@calculators_bp.route("/rate-tables", methods=["GET"])
def rate_tables() -> Any:
    """Return the reference rate tables in use."""
    return jsonify(get_rate_tables().model_dump(mode="json"))


@calculators_bp.route("/calculators/amortization", methods=["POST"])
def amortization() -> Any:
    """Fixed payment, interest totals and optionally the full schedule."""
    form = _parse_form(AmortizationForm)
    result = amortize(form.principal, form.annual_rate_percent, form.term_months)

    response = {"result": result.model_dump()}
    if form.include_schedule:
        schedule = amortization_schedule(
            form.principal, form.annual_rate_percent, form.term_months
        )
        response["schedule"] = [payment.model_dump() for payment in schedule]
        response["chart"] = to_chart_series(
            schedule,
            "payment_number",
            {
                "interest_payment": "interest",
                "principal_payment": "principal",
                "ending_balance": "balance",
            },
        )
    return jsonify(response)


@calculators_bp.route("/calculators/auto-loan", methods=["POST"])
def auto_loan() -> Any:
    """Auto loan payment and, in advanced mode, the cost of ownership."""
    form = _parse_form(AutoLoanForm)
    loan = LoanInput(**form.model_dump(exclude={"advanced"}))
    result = calculate_loan(loan)

    response: dict = {
        "result": result.model_dump(),
        "loan_amount": loan.loan_amount,
        "breakdown": [
            {"name": "Principal", "value": result.total_principal},
            {"name": "Interest", "value": result.total_interest},
        ],
    }

    if form.advanced is not None:
        costs = ownership_costs(
            loan,
            result,
            miles_per_year=form.advanced.miles_per_year,
            mpg=form.advanced.mpg,
            gas_price=form.advanced.gas_price,
            inflation_percent=form.advanced.inflation_percent,
            car_price_inflation_percent=current_app.config[
                "CAR_PRICE_INFLATION_PERCENT"
            ],
        )
        response["advanced"] = costs.model_dump()

    return jsonify(response)


@calculators_bp.route("/calculators/projection", methods=["POST"])
def projection() -> Any:
    """Compound projection series with optional real values."""
    form = _parse_form(ProjectionForm)
    points = project_input(form.to_input())

    y_fields = ["nominal_value"]
    if form.deflator_rate_percent is not None:
        y_fields.append("real_value")

    return jsonify(
        {
            "points": [point.model_dump() for point in points],
            "final_value": final_value(points),
            "chart": to_chart_series(points, "period", y_fields),
        }
    )


@calculators_bp.route("/calculators/scenarios", methods=["POST"])
def scenarios() -> Any:
    """The same projection under several rate offsets."""
    form = _parse_form(ScenarioForm)
    comparison = compare_scenarios(form.base.to_input(), form.deltas)

    return jsonify(
        {
            "scenarios": {
                label: [point.model_dump() for point in points]
                for label, points in comparison.items()
            },
            "final_values": scenario_endpoints(comparison),
            "chart": overlay_series(comparison),
        }
    )


@calculators_bp.route("/calculators/legacy", methods=["POST"])
def legacy() -> Any:
    """Multi-generation wealth erosion for a currency and portfolio."""
    form = _parse_form(LegacyForm)
    plan = plan_legacy(
        form.initial_wealth,
        form.currency,
        form.portfolio_type,
        form.generations,
        rate_tables=get_rate_tables(),
        gap_years=current_app.config["GENERATION_GAP_YEARS"],
        healthcare_erosion_rate=current_app.config["HEALTHCARE_EROSION_RATE"],
        healthcare_inflation_multiplier=current_app.config[
            "HEALTHCARE_INFLATION_MULTIPLIER"
        ],
    )

    return jsonify({"result": plan.model_dump(), "chart": generation_rows(plan.steps)})


@calculators_bp.route("/calculators/ppp", methods=["POST"])
def ppp() -> Any:
    form = _parse_form(PPPForm)
    conversion = convert_between_countries(
        form.amount, form.from_country, form.to_country, get_rate_tables()
    )
    return jsonify({"result": conversion.model_dump()})


@calculators_bp.route("/calculators/insurance", methods=["POST"])
def insurance() -> Any:
    """Premium projection at the currency's medical inflation rate."""
    form = _parse_form(InsuranceForm)

    medical_inflation = form.medical_inflation_percent
    if medical_inflation is None:
        medical_inflation = get_rate_tables().medical_inflation_for(form.currency)

    projection_result = project_premium(
        form.premium,
        form.to_profile(),
        medical_inflation,
        form.years,
        currency=form.currency,
        general_inflation_percent=form.general_inflation_percent,
    )

    return jsonify(
        {
            "result": projection_result.model_dump(),
            "chart": to_chart_series(
                projection_result.series,
                "year",
                ["premium", "general_inflation", "medical_inflation"],
            ),
        }
    )


@calculators_bp.route("/calculators/roi", methods=["POST"])
def roi() -> Any:
    """Investment return against inflation, taxes and a Treasury benchmark."""
    form = _parse_form(ROIForm)

    benchmark_rate = 0.0
    if form.benchmark != "none":
        benchmark_rate = get_rate_tables().treasury_rate_for(
            BENCHMARK_TREASURY_KEYS[form.benchmark]  # type: ignore[arg-type]
        )

    analysis = analyze_roi(
        form.initial,
        form.final,
        form.years,
        tax_rate_percent=form.tax_rate_percent,
        inflation_percent=form.inflation_percent,
        benchmark_rate_percent=benchmark_rate,
    )

    return jsonify(
        {
            "result": analysis.model_dump(),
            "benchmark_rate_percent": benchmark_rate,
            "chart": to_chart_series(
                analysis.yearly_breakdown, "year", ["nominal_value", "real_value"]
            ),
        }
    )


@calculators_bp.route("/calculators/budget", methods=["POST"])
def budget() -> Any:
    form = _parse_form(BudgetForm)
    plan = budget_50_30_20(form.monthly_income, form.inflation_percent, form.years_ahead)
    return jsonify({"result": plan.model_dump()})


@calculators_bp.route("/calculators/emergency-fund", methods=["POST"])
def emergency_fund_plan() -> Any:
    """Emergency fund target using the currency's inflation rate by default."""
    form = _parse_form(EmergencyFundForm)

    inflation = form.inflation_percent
    if inflation is None:
        inflation = get_rate_tables().general_inflation_for(form.currency)

    plan = emergency_fund(
        form.monthly_expenses,
        form.months_of_coverage,
        form.current_savings,
        form.monthly_savings_capacity,
        inflation,
    )
    return jsonify({"result": plan.model_dump(), "inflation_percent": inflation})


@calculators_bp.route("/calculators/student-loan", methods=["POST"])
def student_loan() -> Any:
    """Student loan payment and real burden over the repayment term."""
    form = _parse_form(StudentLoanForm)
    tables = get_rate_tables()

    rate = form.annual_rate_percent
    if rate is None:
        award_year = form.award_year or max(tables.federal_student_loan_rates)
        rate = tables.student_loan_rate_for(award_year)

    result = calculate_student_loan(
        form.principal,
        rate,
        form.term_years,
        repayment_plan=form.repayment_plan,
        idr_plan=form.idr_plan,
        annual_income=form.annual_income,
        household_size=form.household_size,
        rate_tables=tables,
    )

    return jsonify(
        {
            "result": result.model_dump(),
            "annual_rate_percent": rate,
            "chart": to_chart_series(
                result.real_burden_over_time,
                "year",
                ["nominal_payment", "real_payment"],
            ),
        }
    )


@calculators_bp.route("/calculators/salary", methods=["POST"])
def salary() -> Any:
    form = _parse_form(SalaryForm)
    adjustment = salary_adjustment(form.salary, form.start_cpi, form.end_cpi, form.years)
    return jsonify({"result": adjustment.model_dump()})


@calculators_bp.route("/calculators/retirement", methods=["POST"])
def retirement() -> Any:
    """Savings at retirement, income shortfall and recommended contribution."""
    form = _parse_form(RetirementForm)
    plan = form.to_input()
    result = project_retirement(
        plan,
        healthcare_inflation_multiplier=current_app.config[
            "HEALTHCARE_INFLATION_MULTIPLIER"
        ],
    )

    return jsonify(
        {
            "result": result.model_dump(),
            "chart": to_chart_series(
                savings_trajectory(plan), "period", ["nominal_value", "real_value"]
            ),
        }
    )


@calculators_bp.route("/calculators/deflation", methods=["POST"])
def deflation() -> Any:
    """Purchasing power of an amount held in a hard asset between two years."""
    form = _parse_form(DeflationForm)
    tables = get_rate_tables()
    result = asset_purchasing_power_between(
        form.amount, form.asset, form.start_year, form.end_year, rate_tables=tables
    )
    history = asset_value_history(
        form.amount, form.asset, form.start_year, form.end_year, rate_tables=tables
    )

    return jsonify(
        {
            "result": result.model_dump(),
            "available_years": list(tables.asset_years(form.asset)),
            "chart": to_chart_series(history, "year", ["price", "value"]),
        }
    )

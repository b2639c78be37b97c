"""Tests for chart series shaping."""

from calcsite.models.generations import project_generations
from calcsite.models.projection import ProjectionInput, project
from calcsite.models.scenarios import compare_scenarios
from calcsite.models.series import generation_rows, overlay_series, to_chart_series


class TestToChartSeries:
    """Test cases for to_chart_series()."""

    def test_rows_from_models(self):
        points = project(100, 10, 2, deflator_rate_percent=0)

        rows = to_chart_series(points, "period", ["nominal_value", "real_value"])

        assert len(rows) == 3
        assert rows[0] == {"period": 0, "nominal_value": 100.0, "real_value": 100.0}

    def test_renamed_fields(self):
        points = project(100, 10, 1)

        rows = to_chart_series(points, "period", {"nominal_value": "value"})

        assert rows[1]["value"] == points[1].nominal_value
        assert "nominal_value" not in rows[1]

    def test_none_values_omitted(self):
        """Points without real values produce rows without that key."""
        rows = to_chart_series(project(100, 5, 2), "period", ["nominal_value", "real_value"])

        assert all("real_value" not in row for row in rows)

    def test_rows_from_mappings(self):
        rows = to_chart_series([{"x": 1, "y": 2}], "x", ["y"])

        assert rows == [{"x": 1, "y": 2}]

    def test_empty_input(self):
        assert to_chart_series([], "period", ["nominal_value"]) == []


class TestOverlaySeries:
    def test_one_row_per_period(self):
        base = ProjectionInput(base_value=1000, annual_rate_percent=5, periods=4)
        comparison = compare_scenarios(base)

        rows = overlay_series(comparison)

        assert len(rows) == 5
        assert set(rows[0]) == {"period", "conservative", "current", "aggressive"}
        assert rows[4]["current"] == comparison["current"][4].nominal_value


class TestGenerationRows:
    def test_generation_row_keys(self):
        steps = project_generations(1_000_000, 0.075, 0.032, 1.81, 2)

        rows = generation_rows(steps)

        assert [row["years_elapsed"] for row in rows] == [25, 50]
        assert set(rows[0]) == {
            "years_elapsed",
            "nominal",
            "real",
            "inflationLoss",
            "healthcareLoss",
        }
        assert rows[0]["real"] == steps[0].real_value_retained

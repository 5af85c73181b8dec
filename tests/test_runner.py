"""Tests for analysis orchestration.

Test categories:
- TestAnalysisRequest: parameter validation and normalization
- TestUncertaintyAnalysis: Wald/Maximax/Savage/Hurwitz runs
- TestRiskAnalysis: Bayes/Laplace runs
- TestFailureIsolation: one failing criterion does not stop the others
"""

import logging

import pytest
from pydantic import ValidationError

from decision_criteria.analysis.runner import (
    AnalysisMode,
    AnalysisRequest,
    analyze_risk,
    analyze_uncertainty,
    run_analysis,
)
from decision_criteria.models.matrix import PayoffMatrix
from decision_criteria.models.results import UNDETERMINED, Confidence, CriterionType

UNIFORM = [0.25, 0.25, 0.25, 0.25]


# =============================================================================
# Request Validation
# =============================================================================


class TestAnalysisRequest:
    """Tests for AnalysisRequest validation."""

    def test_mode_from_string(self) -> None:
        request = AnalysisRequest(mode="uncertainty")

        assert request.mode == AnalysisMode.UNCERTAINTY
        assert request.alpha == 0.5

    def test_default_alpha_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DECISION_CRITERIA_DEFAULT_ALPHA", "0.8")
        assert AnalysisRequest(mode="uncertainty").alpha == 0.8

    @pytest.mark.parametrize("alpha", [-0.01, 1.5])
    def test_alpha_out_of_range(self, alpha: float) -> None:
        with pytest.raises(ValidationError, match=r"\[0, 1\]"):
            AnalysisRequest(mode="uncertainty", alpha=alpha)

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisRequest(mode="certainty")

    def test_risk_requires_probabilities(self) -> None:
        with pytest.raises(ValidationError, match="required for risk"):
            AnalysisRequest(mode="risk")

    def test_probabilities_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="sum to 1"):
            AnalysisRequest(mode="risk", probabilities=[0.5, 0.3])

    def test_sum_within_tolerance_accepted(self) -> None:
        request = AnalysisRequest(mode="risk", probabilities=[0.2, 0.3, 0.495])
        normalized = request.normalized_probabilities()

        assert sum(normalized) == pytest.approx(1.0)
        assert normalized[2] == pytest.approx(0.495 / 0.995)

    def test_tolerance_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DECISION_CRITERIA_PROBABILITY_TOLERANCE", "0.2")
        request = AnalysisRequest(mode="risk", probabilities=[0.5, 0.4])
        assert request.probabilities == [0.5, 0.4]

    def test_negative_probability_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-negative"):
            AnalysisRequest(mode="risk", probabilities=[1.5, -0.5])

    def test_uncertainty_ignores_probabilities_sum(self) -> None:
        request = AnalysisRequest(mode="uncertainty", probabilities=[0.1])
        assert request.params_for(CriterionType.WALD) == {}

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            AnalysisRequest(mode="risk", probabilities=[2.0])

    def test_params_for(self) -> None:
        request = AnalysisRequest(mode="risk", probabilities=UNIFORM, alpha=0.3)

        assert request.params_for(CriterionType.HURWITZ) == {"alpha": 0.3}
        assert request.params_for(CriterionType.BAYES) == {"probabilities": UNIFORM}
        assert request.params_for(CriterionType.LAPLACE) == {}


# =============================================================================
# Uncertainty Analysis
# =============================================================================


class TestUncertaintyAnalysis:
    """Tests for uncertainty mode."""

    def test_scenario_every_criterion_disagrees(self, scenario_matrix) -> None:
        """Wald A, Maximax C, Savage D, Hurwitz B: a four-way tie."""
        report = analyze_uncertainty(scenario_matrix, alpha=0.5)

        assert [rec.strategy for rec in report.recommendations] == ["A", "C", "D", "B"]
        assert [result.type for result in report.results] == [
            CriterionType.WALD,
            CriterionType.MAXIMAX,
            CriterionType.SAVAGE,
            CriterionType.HURWITZ,
        ]
        final = report.final
        assert final.strategy == "A"
        assert final.percentage == 25
        assert final.confidence == Confidence.LOW
        assert final.has_tie
        assert final.alternatives == ("A", "C", "D", "B")
        assert report.statistics.analysis_type == "uncertainty"

    def test_example_matrix_is_unanimous(self) -> None:
        report = analyze_uncertainty(PayoffMatrix.example())
        final = report.final

        assert final.strategy == "Region 4"
        assert final.frequency == 4
        assert final.percentage == 100
        assert final.confidence == Confidence.HIGH

    def test_alpha_reaches_hurwitz(self, scenario_matrix) -> None:
        report = analyze_uncertainty(scenario_matrix, alpha=1.0)
        hurwitz = report.results[3]

        assert hurwitz.values == (780, 900, 950, 850)
        assert hurwitz.strategy == "C"

    def test_empty_matrix_all_undetermined(self, empty_matrix, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="decision_criteria.analysis.runner"):
            report = analyze_uncertainty(empty_matrix)

        assert all(rec.strategy == UNDETERMINED for rec in report.recommendations)
        assert report.final.strategy is None
        assert report.final.total == 4
        assert "empty or not fully numeric" in caplog.text

    def test_incomplete_matrix_undetermined(self, scenario_matrix) -> None:
        matrix = scenario_matrix.model_copy(
            update={"data": [[None, 1.0, 2.0, 3.0]] + scenario_matrix.data[1:]}
        )
        report = analyze_uncertainty(matrix)
        assert report.statistics.valid_recommendations == 0


# =============================================================================
# Risk Analysis
# =============================================================================


class TestRiskAnalysis:
    """Tests for risk mode."""

    def test_uniform_probabilities(self, scenario_matrix) -> None:
        report = analyze_risk(scenario_matrix, UNIFORM)

        assert [rec.strategy for rec in report.recommendations] == ["B", "B"]
        assert report.results[0].values == report.results[1].values
        final = report.final
        assert final.strategy == "B"
        assert final.percentage == 100
        assert final.confidence == Confidence.HIGH
        assert not final.has_tie

    def test_probabilities_normalized_before_bayes(self, scenario_matrix) -> None:
        """A vector summing to 0.996 is rescaled before Bayes sees it."""
        report = analyze_risk(scenario_matrix, [0.249, 0.249, 0.249, 0.249])
        bayes = report.results[0]

        assert sum(bayes.calculations[0].weights) == pytest.approx(1.0)
        assert bayes.values == pytest.approx(report.results[1].values)

    def test_skewed_probabilities(self, scenario_matrix) -> None:
        report = analyze_risk(scenario_matrix, [0.0, 1.0, 0.0, 0.0])

        assert report.results[0].strategy == "C"
        assert report.results[1].strategy == "B"
        assert report.final.has_tie


# =============================================================================
# Failure Isolation
# =============================================================================


class TestFailureIsolation:
    """A failing criterion is recorded and the rest still run."""

    def test_probability_length_mismatch(self, scenario_matrix, caplog) -> None:
        request = AnalysisRequest(mode="risk", probabilities=[0.5, 0.25, 0.25])
        with caplog.at_level(logging.WARNING, logger="decision_criteria.analysis.runner"):
            report = run_analysis(scenario_matrix, request)

        bayes, laplace = report.recommendations
        assert bayes.strategy == UNDETERMINED
        assert bayes.criterion_type == CriterionType.BAYES
        assert "Expected 4 probabilities" in bayes.details["error"]
        assert laplace.strategy == "B"

        assert len(report.results) == 1
        assert report.failed_criteria() == [bayes]
        assert report.final.strategy == "B"
        assert report.final.percentage == 50
        assert report.final.confidence == Confidence.MEDIUM
        assert "Error calculating bayes" in caplog.text

    def test_aggregator_reused_and_cleared(self, scenario_matrix, aggregator) -> None:
        aggregator.add_recommendation("Stale", "Z", "wald")
        run_analysis(scenario_matrix, AnalysisRequest(mode="risk", probabilities=UNIFORM), aggregator)

        assert [rec.strategy for rec in aggregator.get_all_recommendations()] == ["B", "B"]
        assert aggregator.analysis_type == "risk"

    def test_report_round_trips_to_json_dict(self, scenario_matrix) -> None:
        request = AnalysisRequest(mode="risk", probabilities=[1.0])
        report = run_analysis(scenario_matrix, request)

        payload = [rec.to_dict() for rec in report.recommendations]
        assert payload[0]["details"] == {"error": report.failed_criteria()[0].details["error"]}
        assert payload[1]["details"]["type"] == "laplace"

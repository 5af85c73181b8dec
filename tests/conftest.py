"""Shared pytest fixtures and markers for all tests."""

import random

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "property: marks randomized property checks over many matrices"
    )


# Payoff matrix shared by the reference scenarios
SCENARIO_DATA = [
    [320, 780, 640, 500],
    [900, 400, 300, 700],
    [600, 950, 200, 450],
    [500, 550, 850, 300],
]


@pytest.fixture
def scenario_matrix():
    """Provide the 4x4 reference matrix with strategies A-D."""
    from decision_criteria.models.matrix import PayoffMatrix
    return PayoffMatrix(
        strategies=["A", "B", "C", "D"],
        states=["S1", "S2", "S3", "S4"],
        data=SCENARIO_DATA,
    )


@pytest.fixture
def empty_matrix():
    """Provide a matrix with no strategies and no states."""
    from decision_criteria.models.matrix import PayoffMatrix
    return PayoffMatrix()


@pytest.fixture
def aggregator():
    """Provide a fresh results aggregator."""
    from decision_criteria.analysis.aggregator import ResultsAggregator
    return ResultsAggregator()


def make_random_matrix(rng: random.Random, max_strategies: int = 6, max_states: int = 6):
    """Build a random valid matrix for property checks."""
    from decision_criteria.models.matrix import PayoffMatrix
    strategies_count = rng.randint(1, max_strategies)
    states_count = rng.randint(1, max_states)
    matrix = PayoffMatrix.create(strategies_count, states_count)
    data = [
        [rng.choice([rng.uniform(-1000, 1000), float(rng.randint(-50, 50))]) for _ in range(states_count)]
        for _ in range(strategies_count)
    ]
    return matrix.model_copy(update={"data": data})


@pytest.fixture
def random_matrices():
    """Provide 200 seeded random matrices."""
    rng = random.Random(42)
    return [make_random_matrix(rng) for _ in range(200)]

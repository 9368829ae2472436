"""Shared fixtures for scoring tests."""

import pytest
from tests.conftest import make_election


@pytest.fixture
def worked_example():
    """Two ballots over three candidates.

             1st  2nd
    V1        B    A
    V2        A

    n=3: A = 2 + 3 = 5, B = 3, C = 0. Ranking: A, B, C
    """
    return make_election(["A", "B", "C"], {
        "V1": ["B", "A"],
        "V2": ["A"],
    })


@pytest.fixture
def clear_winner():
    """Three full ballots over four candidates.

             1st  2nd  3rd  4th
    V1        A    B    C    D
    V2        A    C    B    D
    V3        B    A    C    D

    n=4: A = 4+4+3 = 11, B = 3+2+4 = 9, C = 2+3+2 = 7, D = 3
    """
    return make_election(["A", "B", "C", "D"], {
        "V1": ["A", "B", "C", "D"],
        "V2": ["A", "C", "B", "D"],
        "V3": ["B", "A", "C", "D"],
    })


@pytest.fixture
def late_tie():
    """A tie where the later-registered candidate would win alphabetically.

             1st  2nd
    V1        Z    M
    V2        M    Z

    n=3: Z = 3+2 = 5, M = 2+3 = 5, A = 0.
    Snapshot order is Z, M, A so Z stays ahead of M.
    """
    return make_election(["Z", "M", "A"], {
        "V1": ["Z", "M"],
        "V2": ["M", "Z"],
    })


@pytest.fixture
def no_votes():
    """An election that ended without a single ballot."""
    return make_election(["A", "B", "C"], {})

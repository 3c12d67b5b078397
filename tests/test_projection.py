import pytest
from votecast.errors import DivisionByZeroError
from votecast.projection import Prediction, Projector, project
from votecast.unit import make_unit


@pytest.fixture
def reference():
    """ The current record of a reference unit: 30 voters, 20 ballots. """
    return make_unit('1', '10', '1', 30, 20, [12, 8])


def test_project_same_electorate(reference):
    unit = make_unit('1', '10', '2', 30, 20, [5, 15])
    prediction = Projector().project(unit, reference)
    assert prediction == Prediction(id='1-10-2', reference_unit_id='1-10-1',
                                    total_voters=30, total_votes=20,
                                    votes=(12, 8), votes_ratio=(0.6, 0.4))


def test_project_scales_by_electorate(reference):
    unit = make_unit('2', '20', '1', 40, 20, [20, 0])
    prediction = project(unit, reference)
    assert prediction.total_voters == 40
    assert prediction.total_votes == pytest.approx(20 * 40 / 30)
    assert prediction.votes == pytest.approx((16, 32 / 3))
    assert prediction.votes_ratio == reference.votes_ratio


def test_projection_is_not_rounded(reference):
    unit = make_unit('1', '10', '3', 31, 0, [0, 0])
    prediction = project(unit, reference)
    assert prediction.total_votes == pytest.approx(20 * 31 / 30)
    assert prediction.total_votes != round(prediction.total_votes)


def test_project_reference_without_votes():
    reference = make_unit('1', '10', '1', 30, 0, [0, 0])
    unit = make_unit('1', '10', '2', 50, 25, [20, 5])
    prediction = project(unit, reference)
    assert prediction.total_votes == 0
    assert prediction.votes == (0, 0)


def test_project_zero_electorate_reference():
    reference = make_unit('1', '10', '1', 0, 0, [0, 0])
    unit = make_unit('1', '10', '2', 50, 25, [20, 5])
    with pytest.raises(DivisionByZeroError):
        project(unit, reference)


def test_division_by_zero_is_a_zero_division_error():
    assert issubclass(DivisionByZeroError, ZeroDivisionError)

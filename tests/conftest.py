import pytest

from admitrank.domain.models import Applicant, Residence, Subject


@pytest.fixture
def make_applicant():
    def _make(applicant_id, prefs=(), residence=Residence.OUT_DISTRICT, quota=False, **scores):
        return Applicant(
            id=applicant_id,
            title="",
            first_name=applicant_id,
            last_name="",
            preferred_programs=list(prefs),
            scores=dict(scores),
            residence=residence,
            is_quota_reserved=quota,
        )
    return _make


@pytest.fixture
def subjects():
    return [Subject(id="math", name="Math"), Subject(id="science", name="Science")]

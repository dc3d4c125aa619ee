"""
Shared fixtures: in-memory stores and seeded question banks.
"""

from datetime import date

import pytest

from app.profile.models import ProfileRecord
from app.questions.models import QuestionCatalog

from fakes import (
    FakeAssessmentStore,
    FakeProfileStore,
    FakeQuestionStore,
    cancer_items,
    catalog_of,
    glaucoma_items,
)


@pytest.fixture
def question_store() -> FakeQuestionStore:
    return FakeQuestionStore(glaucoma_items() + cancer_items())


@pytest.fixture
def profile_store() -> FakeProfileStore:
    return FakeProfileStore({
        "diabetic-45": ProfileRecord(user_id="diabetic-45", has_diabetes=True, date_of_birth=date(1981, 3, 2)),
        "healthy-30": ProfileRecord(user_id="healthy-30", has_diabetes=False, date_of_birth=date(1996, 1, 1)),
    })


@pytest.fixture
def assessment_store() -> FakeAssessmentStore:
    return FakeAssessmentStore()


@pytest.fixture
def glaucoma_catalog() -> QuestionCatalog:
    return catalog_of("glaucoma", glaucoma_items())


@pytest.fixture
def cancer_catalog() -> QuestionCatalog:
    return catalog_of("cancer", cancer_items())

"""
HTTP Endpoint Tests

FastAPI TestClient with store dependencies overridden by in-memory fakes.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from api_server import app
from app.history.models import TrendPoint
from app.history.router import get_assessment_store
from app.profile.router import get_profile_store
from app.questions.admin import get_question_store
from app.scoring.engine import AssessmentEngine, SubmissionRequest
from app.scoring.models import AnswerInput
from app.scoring.router import get_engine
from app.shared.errors import DuplicateQuestionError

from fakes import TODAY, FakeAssessmentStore, FakeQuestionStore, glaucoma_items


class AdminQuestionStore(FakeQuestionStore):
    """FakeQuestionStore with admin writes."""

    def create(self, item):
        if self.get(item.illness_type, item.question_id):
            raise DuplicateQuestionError(item.illness_type, item.question_id)
        self.items.append(item)
        return item

    def update(self, item):
        for i, existing in enumerate(self.items):
            if (existing.illness_type, existing.question_id) == (item.illness_type, item.question_id):
                self.items[i] = item
                return item
        return None

    def delete(self, illness_type, question_id):
        before = len(self.items)
        self.items = [
            i for i in self.items
            if (i.illness_type, i.question_id) != (illness_type, question_id)
        ]
        return len(self.items) < before


class HistoryStore(FakeAssessmentStore):

    def list_for_user(self, user_id, illness_type=None, limit=10, start_date=None, end_date=None):
        rows = [self.get(aid) for aid in self.rows]
        rows = [a for a in rows if a.user_id == user_id and (not illness_type or a.illness_type == illness_type)]
        return sorted(rows, key=lambda a: a.created_at, reverse=True)[:limit]

    def trends(self, user_id, illness_type=None, limit=30):
        rows = [self.get(aid) for aid in self.rows]
        rows = [a for a in rows if a.user_id == user_id and (not illness_type or a.illness_type == illness_type)]
        return [
            TrendPoint(
                assessment_id=a.assessment_id,
                illness_type=a.illness_type,
                total_score=a.total_score,
                risk_level=a.risk_level,
                created_at=a.created_at,
            )
            for a in sorted(rows, key=lambda a: a.created_at)[:limit]
        ]


@pytest.fixture
def stores(question_store, profile_store):
    questions = AdminQuestionStore(question_store.items)
    history = HistoryStore()
    engine = AssessmentEngine(questions, profile_store, history, today=lambda: TODAY)

    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_question_store] = lambda: questions
    app.dependency_overrides[get_assessment_store] = lambda: history
    app.dependency_overrides[get_profile_store] = lambda: profile_store
    yield questions, history
    app.dependency_overrides.clear()


@pytest.fixture
def engine(stores):
    return app.dependency_overrides[get_engine]()


@pytest.fixture
def client(stores, monkeypatch):
    monkeypatch.delenv("ADMIN_API_KEY", raising=False)
    return TestClient(app)


class TestSubmitEndpoint:

    def test_submit_created(self, client):
        response = client.post("/api/v1/assessments/cancer", json={
            "user_id": "healthy-30",
            "answers": [{"question_id": "C6", "answer": "No"}],
        })

        assert response.status_code == 201
        body = response.json()
        assert body["total_score"] == 1
        assert body["risk_level"] == "Low"
        assert body["assessment_id"]
        assert body["recommendations"][-1] == "Consult with a healthcare professional for personalized advice."

    def test_unconfigured_type_is_400(self, client, stores):
        _, history = stores

        response = client.post("/api/v1/assessments/asthma", json={"user_id": "healthy-30", "answers": []})

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "NO_QUESTIONS_CONFIGURED"
        assert history.rows == {}

    def test_storage_failure_is_503(self, client, stores):
        _, history = stores
        history.fail = True

        response = client.post("/api/v1/assessments/cancer", json={"user_id": "healthy-30", "answers": []})

        assert response.status_code == 503
        assert response.json()["detail"]["error_code"] == "STORAGE_UNAVAILABLE"

    def test_missing_user_id_is_422(self, client):
        response = client.post("/api/v1/assessments/cancer", json={"answers": []})
        assert response.status_code == 422

    def test_warnings_returned(self, client):
        response = client.post("/api/v1/assessments/glaucoma", json={
            "user_id": "ghost",
            "answers": [{"question_id": "G7", "answer": "Yes"}],
        })

        codes = {w["code"] for w in response.json()["warnings"]}
        assert codes == {"PROFILE_NOT_FOUND", "CLIENT_ANSWER_FOR_AUTO_QUESTION"}


class TestHistoryEndpoints:

    def test_get_assessment_round_trip(self, client):
        created = client.post("/api/v1/assessments/glaucoma", json={
            "user_id": "diabetic-45",
            "answers": [{"question_id": "G1", "answer": "Yes"}],
        }).json()

        response = client.get(f"/api/v1/history/assessments/{created['assessment_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["total_score"] == created["total_score"]
        assert body["risk_level"] == created["risk_level"]
        assert [r["question_id"] for r in body["responses"]] == ["G7", "G11", "G1"]

    def test_unknown_assessment_404(self, client):
        assert client.get("/api/v1/history/assessments/nope").status_code == 404

    def test_user_history_filters_type(self, client):
        client.post("/api/v1/assessments/cancer", json={"user_id": "healthy-30", "answers": []})
        client.post("/api/v1/assessments/glaucoma", json={"user_id": "healthy-30", "answers": []})

        body = client.get("/api/v1/history/users/healthy-30", params={"illness_type": "Cancer"}).json()

        assert body["count"] == 1
        assert body["assessments"][0]["illness_type"] == "cancer"

    def test_inverted_date_range_rejected(self, client):
        response = client.get("/api/v1/history/users/healthy-30", params={
            "start_date": "2026-10-10", "end_date": "2026-10-01",
        })
        assert response.status_code == 400

    def test_trends_oldest_first_with_type_filter(self, client, engine):
        later = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
        earlier = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
        screened = [AnswerInput(question_id="C6", answer="Yes")]
        not_screened = [AnswerInput(question_id="C6", answer="No")]

        newest = engine.submit(SubmissionRequest(user_id="healthy-30", illness_type="cancer", answers=screened), created_at=later)
        oldest = engine.submit(SubmissionRequest(user_id="healthy-30", illness_type="cancer", answers=not_screened), created_at=earlier)
        engine.submit(SubmissionRequest(user_id="healthy-30", illness_type="glaucoma", answers=[]), created_at=earlier)

        response = client.get("/api/v1/history/users/healthy-30/trends", params={"illness_type": " Cancer "})

        assert response.status_code == 200
        body = response.json()
        assert body["illness_type"] == "cancer"
        assert body["count"] == 2
        assert [p["assessment_id"] for p in body["points"]] == [oldest.assessment_id, newest.assessment_id]
        assert [p["total_score"] for p in body["points"]] == [1, 0]

    def test_trends_without_filter(self, client):
        client.post("/api/v1/assessments/cancer", json={"user_id": "healthy-30", "answers": []})

        body = client.get("/api/v1/history/users/healthy-30/trends").json()

        assert body["illness_type"] is None
        assert body["count"] == 1


class TestProfileEndpoints:

    def test_unknown_profile_404(self, client):
        assert client.get("/api/v1/profiles/nobody").status_code == 404

    def test_profile_write_enables_auto_population(self, client):
        saved = client.put("/api/v1/profiles/new-user", json={
            "has_diabetes": "true",
            "date_of_birth": "1970-05-01",
        })

        assert saved.status_code == 200
        assert saved.json()["has_diabetes"] is True

        created = client.post("/api/v1/assessments/glaucoma", json={"user_id": "new-user", "answers": []}).json()
        stored = client.get(f"/api/v1/history/assessments/{created['assessment_id']}").json()

        assert created["warnings"] == []
        assert created["total_score"] == pytest.approx(0.91 + 0.27)
        assert [(r["question_id"], r["answer"]) for r in stored["responses"]] == [("G7", "Yes"), ("G11", "Yes")]

    def test_form_string_false_is_not_diabetic(self, client):
        body = client.put("/api/v1/profiles/new-user", json={"has_diabetes": "false"}).json()

        assert body["has_diabetes"] is False
        assert body["date_of_birth"] is None

    def test_partial_update_keeps_date_of_birth(self, client):
        body = client.put("/api/v1/profiles/diabetic-45", json={"has_diabetes": False}).json()

        assert body["has_diabetes"] is False
        assert body["date_of_birth"] == "1981-03-02"

    def test_unknown_field_rejected(self, client):
        response = client.put("/api/v1/profiles/new-user", json={"blood_type": "A"})
        assert response.status_code == 422

    def test_write_requires_admin_key_when_configured(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_API_KEY", "secret")

        denied = client.put("/api/v1/profiles/new-user", json={"has_diabetes": True})
        readable = client.get("/api/v1/profiles/diabetic-45")

        assert denied.status_code == 401
        assert readable.status_code == 200


class TestQuestionAdminEndpoints:

    def test_list_questions(self, client):
        body = client.get("/api/v1/questions/glaucoma").json()

        assert body["count"] == len(glaucoma_items())

    def test_create_and_duplicate(self, client):
        payload = {"question_id": "A1", "text": "Wheezing", "weight": 2.5}

        first = client.post("/api/v1/questions/asthma", json=payload)
        second = client.post("/api/v1/questions/asthma", json=payload)

        assert first.status_code == 201
        assert first.json()["illness_type"] == "asthma"
        assert second.status_code == 409

    def test_new_type_becomes_scorable(self, client):
        client.post("/api/v1/questions/asthma", json={"question_id": "A1", "text": "Wheezing", "weight": 6})

        response = client.post("/api/v1/assessments/asthma", json={
            "user_id": "healthy-30",
            "answers": [{"question_id": "A1", "answer": "Yes"}],
        })

        assert response.status_code == 201
        assert response.json()["risk_level"] == "High risk"

    def test_non_positive_weight_rejected(self, client):
        response = client.post("/api/v1/questions/asthma", json={"question_id": "A1", "text": "x", "weight": 0})
        assert response.status_code == 422

    def test_update_question(self, client):
        response = client.put("/api/v1/questions/glaucoma/G1", json={"weight": 3})

        assert response.status_code == 200
        assert response.json()["weight"] == 3
        assert response.json()["text"] == "Question G1"

    def test_delete_question(self, client):
        assert client.delete("/api/v1/questions/glaucoma/G10").status_code == 204
        assert client.delete("/api/v1/questions/glaucoma/G10").status_code == 404

    def test_admin_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setenv("ADMIN_API_KEY", "secret")
        payload = {"question_id": "A1", "text": "Wheezing", "weight": 2.5}

        denied = client.post("/api/v1/questions/asthma", json=payload)
        allowed = client.post("/api/v1/questions/asthma", json=payload, headers={"X-Admin-API-Key": "secret"})

        assert denied.status_code == 401
        assert allowed.status_code == 201


class TestHealthEndpoints:

    def test_quick(self, client):
        assert client.get("/api/v1/health/quick").json()["status"] == "ok"

    def test_database_unreachable_is_degraded(self, client):
        with patch("app.health.router.get_db", return_value=None):
            body = client.get("/api/v1/health").json()

        assert body["overall_status"] == "degraded"
        assert body["components"]["database"]["status"] == "error"
        assert body["components"]["scoring"]["illness_types"] == ["cancer", "generic", "glaucoma"]

    def test_all_tables_present(self, client):
        conn = MagicMock()
        conn.cursor.return_value.fetchone.return_value = {"present": True}

        with patch("app.health.router.get_db", return_value=conn):
            body = client.get("/api/v1/health").json()

        assert body["overall_status"] == "healthy"
        assert body["components"]["database"]["tables"]["assessments"] is True
        conn.close.assert_called_once()

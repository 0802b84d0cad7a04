"""
Integration tests for the /v1/essay-feedback endpoint with a stubbed gateway
"""
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from main import app
from essaycheck.core.dependencies import get_analysis_client
from essaycheck.core.exceptions import ResponseError, TransportError
from essaycheck.services.analysis_client import AnalysisClient


def _gateway(reply=None, side_effect=None, configured=True):
    gateway = Mock()
    gateway.endpoint = "https://api.example.com/prod/chat" if configured else ""
    gateway.is_configured = configured
    gateway.send.return_value = reply
    gateway.send.side_effect = side_effect
    return gateway


@pytest.mark.integration
class TestEssayFeedbackAPI:
    """Test API integration with a mocked gateway"""

    @pytest.fixture
    def use_gateway(self):
        def _install(gateway):
            app.dependency_overrides[get_analysis_client] = lambda: AnalysisClient(gateway=gateway)
            return gateway
        yield _install
        app.dependency_overrides.clear()

    @pytest.fixture
    def test_client(self):
        return TestClient(app)

    def test_structured_feedback(self, test_client, use_gateway):
        gateway = use_gateway(_gateway(
            reply='Narrative.\nJSON_SUMMARY= {"strengths":["clear thesis"],"weaknesses":["thin body"],'
                  '"sections":{"Body":{"suggestions":["add evidence"]}},'
                  '"grammar":{"overallScore":82,"issues":[{"type":"Tense","message":"use past tense"}]},'
                  '"language":"English"}'
        ))

        res = test_client.post("/v1/essay-feedback", json={"essay": "  My essay text.  "})

        assert res.status_code == 200, res.text
        data = res.json()
        assert data["success"] is True
        assert data["feedback"]["strengths"] == ["clear thesis"]
        assert data["feedback"]["weaknesses"] == ["thin body"]
        assert data["feedback"]["suggestions"] == ["add evidence"]
        assert data["feedback"]["grammar"]["overallScore"] == 82
        assert data["feedback"]["grammar"]["issues"][0]["type"] == "Tense"
        assert data["feedback"]["language"] == "English"
        assert "analyze" in data["timings"]

        sent = gateway.send.call_args.kwargs["message"]
        assert sent.endswith("My essay text.")

    def test_prose_feedback(self, test_client, use_gateway):
        use_gateway(_gateway(reply="This essay needs work."))

        res = test_client.post("/v1/essay-feedback", json={"essay": "My essay."})

        assert res.status_code == 200
        feedback = res.json()["feedback"]
        assert feedback["strengths"] == ["This essay needs work."]
        assert feedback["weaknesses"] == []
        assert feedback["suggestions"] == []
        assert feedback["grammar"] is None

    def test_blank_essay_rejected(self, test_client, use_gateway):
        gateway = use_gateway(_gateway(reply="unused"))

        res = test_client.post("/v1/essay-feedback", json={"essay": "   "})

        assert res.status_code == 422
        gateway.send.assert_not_called()

    def test_missing_endpoint_configuration(self, test_client, use_gateway):
        gateway = use_gateway(_gateway(configured=False))

        res = test_client.post("/v1/essay-feedback", json={"essay": "My essay."})

        assert res.status_code == 500
        assert res.json()["type"] == "ConfigurationError"
        gateway.send.assert_not_called()

    def test_transport_error_is_retryable(self, test_client, use_gateway):
        use_gateway(_gateway(side_effect=TransportError("connection reset")))

        res = test_client.post("/v1/essay-feedback", json={"essay": "My essay."})

        assert res.status_code == 503
        body = res.json()
        assert body["type"] == "TransportError"
        assert body["retry_after"] == 30

    def test_response_error_carries_details(self, test_client, use_gateway):
        use_gateway(_gateway(side_effect=ResponseError(
            "Model overloaded Details: try later",
            status_code=500,
            details={"error": "Model overloaded", "details": "try later"},
        )))

        res = test_client.post("/v1/essay-feedback", json={"essay": "My essay."})

        assert res.status_code == 502
        body = res.json()
        assert body["type"] == "ResponseError"
        assert body["error"] == "Model overloaded Details: try later"
        assert body["upstream_status"] == 500
        assert body["details"]["details"] == "try later"


@pytest.mark.integration
class TestHealth:
    """Test /health"""

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_configured(self):
        app.dependency_overrides[get_analysis_client] = lambda: AnalysisClient(gateway=_gateway())
        res = TestClient(app).get("/health")
        assert res.status_code == 200
        assert res.json()["services"]["analysis_endpoint"] == "configured"

    def test_not_configured(self):
        app.dependency_overrides[get_analysis_client] = lambda: AnalysisClient(gateway=_gateway(configured=False))
        res = TestClient(app).get("/health")
        assert res.status_code == 503
        assert res.json()["status"] == "degraded"

"""
Unit tests for services/analysis_client.py
"""
from unittest.mock import Mock

import pytest

from essaycheck.core.exceptions import ConfigurationError, ResponseError, TransportError
from essaycheck.models.feedback import FeedbackSummary
from essaycheck.services.analysis_client import AnalysisClient
from essaycheck.services.prompt_builder import build_prompt


def _gateway(reply=None, side_effect=None, configured=True):
    gateway = Mock()
    gateway.endpoint = "https://api.example.com/prod/chat" if configured else ""
    gateway.is_configured = configured
    gateway.send.return_value = reply
    gateway.send.side_effect = side_effect
    return gateway


@pytest.mark.unit
class TestAnalysisClient:
    """Test the prompt → gateway → normalize flow"""

    def test_sends_built_prompt_with_empty_history(self):
        gateway = _gateway(reply='JSON_SUMMARY= {"strengths":["clear thesis"]}')
        AnalysisClient(gateway=gateway).analyze("My essay.")

        gateway.send.assert_called_once_with(message=build_prompt("My essay."), history=[])

    def test_returns_structured_summary(self):
        gateway = _gateway(
            reply='Narrative.\nJSON_SUMMARY= {"strengths":["clear thesis"],"grammar":{"overallScore":82,"issues":[]}}'
        )
        summary = AnalysisClient(gateway=gateway).analyze("My essay.")

        assert isinstance(summary, FeedbackSummary)
        assert summary.strengths == ("clear thesis",)
        assert summary.grammar.overall_score == 82

    def test_prose_reply_still_returns_summary(self):
        gateway = _gateway(reply="This essay needs work.")
        summary = AnalysisClient(gateway=gateway).analyze("My essay.")
        assert summary.strengths == ("This essay needs work.",)

    def test_unconfigured_gateway_raises_before_sending(self):
        gateway = _gateway(configured=False)
        with pytest.raises(ConfigurationError):
            AnalysisClient(gateway=gateway).analyze("My essay.")
        gateway.send.assert_not_called()

    @pytest.mark.parametrize("exc", [
        TransportError("connection reset"),
        ResponseError("HTTP 500: Internal Server Error", status_code=500),
    ])
    def test_gateway_errors_propagate(self, exc):
        gateway = _gateway(side_effect=exc)
        with pytest.raises(type(exc)) as info:
            AnalysisClient(gateway=gateway).analyze("My essay.")
        assert info.value is exc

    def test_calls_are_independent(self):
        gateway = _gateway()
        gateway.send.side_effect = [
            'JSON_SUMMARY= {"strengths":["first"]}',
            "Negative: weak conclusion",
        ]
        client = AnalysisClient(gateway=gateway)

        first = client.analyze("Essay one.")
        second = client.analyze("Essay two.")

        assert first.strengths == ("first",)
        assert second.strengths == ()
        assert second.weaknesses == ("weak conclusion",)
        assert gateway.send.call_count == 2

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from config import settings
from models.schemas.ai_enhancement import AIEnhancement, FitExtract, ImpactScale
from services import gemini_client
from services.ai_enhancer import enhance_with_ai
from services.prompt_builder import build_enhancement_prompt

pytestmark = pytest.mark.ai

VALID_PAYLOAD = {
    "jdMustHave": [" SQL ", "React"],
    "candidateMajor": "전자공학",
    "confidenceDeltaByHypothesis": {"fit-mismatch": 0.4, "weak-proof": "high"},
    "suggestedBullets": [{"before": "a", "after": "b", "why": "c"}, "not a dict"],
}


@pytest.fixture
def configured():
    with patch("services.ai_enhancer.gemini_client.is_configured", return_value=True):
        yield


class TestEnhanceWithAI:
    @pytest.mark.asyncio
    async def test_disabled_without_configuration(self):
        generate = AsyncMock()
        with patch("services.ai_enhancer.gemini_client.is_configured", return_value=False), \
             patch("services.ai_enhancer.gemini_client.generate_json", generate):
            assert await enhance_with_ai("jd", "resume") is None
        generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_payload_is_normalized(self, configured):
        with patch("services.ai_enhancer.gemini_client.generate_json", AsyncMock(return_value=VALID_PAYLOAD)):
            ai = await enhance_with_ai("jd", "resume")
        assert ai.jd_must_have == ["sql", "react"]
        assert ai.candidate_major == "전자공학"
        assert ai.confidence_delta_by_hypothesis == {"fit-mismatch": 0.15}
        assert len(ai.suggested_bullets) == 1

    @pytest.mark.asyncio
    async def test_none_response(self, configured):
        with patch("services.ai_enhancer.gemini_client.generate_json", AsyncMock(return_value=None)):
            assert await enhance_with_ai("jd", "resume") is None

    @pytest.mark.asyncio
    async def test_raising_client(self, configured):
        failing = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        with patch("services.ai_enhancer.gemini_client.generate_json", failing):
            assert await enhance_with_ai("jd", "resume") is None

    @pytest.mark.asyncio
    async def test_timeout(self, configured, monkeypatch):
        async def slow(prompt):
            await asyncio.sleep(1)
            return VALID_PAYLOAD

        monkeypatch.setattr(settings, "ai_timeout_seconds", 0.01)
        with patch("services.ai_enhancer.gemini_client.generate_json", slow):
            assert await enhance_with_ai("jd", "resume") is None

    @pytest.mark.asyncio
    async def test_malformed_payload(self, configured):
        payload = {"suggestedBullets": [{"before": ["not", "text"]}]}
        with patch("services.ai_enhancer.gemini_client.generate_json", AsyncMock(return_value=payload)):
            assert await enhance_with_ai("jd", "resume") is None


class TestExtractJsonObject:
    def test_plain_object(self):
        assert gemini_client.extract_json_object('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        assert gemini_client.extract_json_object('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_surrounding_prose(self):
        assert gemini_client.extract_json_object('결과입니다: {"a": {"b": 2}} 끝') == {"a": {"b": 2}}

    def test_no_object(self):
        assert gemini_client.extract_json_object("[1, 2]") is None
        assert gemini_client.extract_json_object("") is None
        assert gemini_client.extract_json_object(None) is None

    def test_broken_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            gemini_client.extract_json_object("{not json}")


class TestGenerateJson:
    @staticmethod
    def _client(generate: AsyncMock) -> MagicMock:
        client = MagicMock()
        client.aio.models.generate_content = generate
        return client

    @pytest.mark.asyncio
    async def test_parses_response_text(self):
        generate = AsyncMock(return_value=SimpleNamespace(text='```json\n{"candidateMajor": "경영학"}\n```'))
        with patch("services.gemini_client.get_client", return_value=self._client(generate)):
            data = await gemini_client.generate_json("prompt")
        assert data == {"candidateMajor": "경영학"}
        assert generate.await_args.kwargs["model"] == settings.ai_model

    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self):
        generate = AsyncMock(return_value=SimpleNamespace(text="{broken"))
        with patch("services.gemini_client.get_client", return_value=self._client(generate)):
            assert await gemini_client.generate_json("prompt") is None

    @pytest.mark.asyncio
    async def test_decode_error_returns_none(self):
        generate = AsyncMock(return_value=SimpleNamespace(text="{not json}"))
        with patch("services.gemini_client.get_client", return_value=self._client(generate)):
            assert await gemini_client.generate_json("prompt") is None

    @pytest.mark.asyncio
    async def test_api_error_returns_none(self):
        generate = AsyncMock(side_effect=RuntimeError("503"))
        with patch("services.gemini_client.get_client", return_value=self._client(generate)):
            assert await gemini_client.generate_json("prompt") is None

    @pytest.mark.asyncio
    async def test_no_client(self):
        with patch("services.gemini_client.get_client", return_value=None):
            assert await gemini_client.generate_json("prompt") is None


def test_get_client_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    assert gemini_client.get_client() is None
    assert gemini_client.is_configured() is False


def test_is_configured_respects_switch(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(settings, "ai_enhance_enabled", False)
    assert gemini_client.is_configured() is False
    monkeypatch.setattr(settings, "ai_enhance_enabled", True)
    assert gemini_client.is_configured() is True


class TestPrompt:
    def test_inputs_are_embedded(self):
        prompt = build_enhancement_prompt("SQL 필수", "분석 경험")
        assert "[JD]\nSQL 필수" in prompt
        assert "[RESUME]\n분석 경험" in prompt
        assert '"confidenceDeltaByHypothesis"' in prompt

    def test_inputs_are_truncated(self, monkeypatch):
        monkeypatch.setattr(settings, "ai_max_input_chars", 10)
        prompt = build_enhancement_prompt("가" * 50, "나" * 50)
        assert "가" * 10 in prompt
        assert "가" * 11 not in prompt
        assert "나" * 11 not in prompt

    def test_non_string_inputs(self):
        prompt = build_enhancement_prompt(None, 42)
        assert "[JD]\n\n" in prompt


class TestEnhancementSchema:
    def test_non_finite_deltas_are_dropped(self):
        ai = AIEnhancement.model_validate(
            {"confidenceDeltaByHypothesis": {"a": float("nan"), "b": float("inf"), "c": 0.4, "d": -1, "e": True}}
        )
        assert ai.confidence_delta_by_hypothesis == {"c": 0.15, "d": -0.15}

    def test_fit_extract_is_coerced(self):
        ai = AIEnhancement.model_validate({
            "fitExtract": {
                "candidateResponsibilityLevel": 7.6,
                "targetResponsibilityLevel": "3",
                "candidateDecisionExposureLevel": float("nan"),
                "candidateRoleType": " Execution ",
                "targetBusinessModel": "charity",
                "candidateImpact": {"revenue": "big", "users": 1200},
                "targetImpact": "n/a",
                "careerShiftRisk": "HIGH",
                "noClearBridgeExperience": "true",
            }
        })
        fit = ai.fit_extract
        assert fit.candidate_responsibility_level == 4
        assert fit.target_responsibility_level is None
        assert fit.candidate_decision_exposure_level is None
        assert fit.candidate_role_type == "execution"
        assert fit.target_business_model == "unknown"
        assert fit.candidate_impact == ImpactScale(users=1200)
        assert fit.target_impact == ImpactScale()
        assert fit.career_shift_risk == "high"
        assert fit.no_clear_bridge_experience is True

    def test_fit_extract_non_object(self):
        assert AIEnhancement.model_validate({"fitExtract": ["x"]}).fit_extract == FitExtract()

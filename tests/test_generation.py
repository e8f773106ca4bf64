"""
Question generation tests: Gemini adapter with a fake client, prompt loading.
"""

import json
from types import SimpleNamespace

import pytest
import yaml

from mathmaster.errors import ContentUnavailable
from mathmaster.generation import GeminiQuizGenerator, QuestionSetGenerator
from mathmaster.utils import format_prompt, get_available_prompts, load_prompt

from .test_validation import wire_payload


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return SimpleNamespace(text=response)


class FakeClient:
    def __init__(self, *responses):
        self.models = FakeModels(responses)


def make_generator(*responses, **kwargs):
    client = FakeClient(*responses)
    generator = GeminiQuizGenerator(client=client, sleep_seconds=0, model="test-model", **kwargs)
    return generator, client


class TestGeminiQuizGenerator:

    def test_is_question_set_generator(self):
        generator, _ = make_generator()
        assert isinstance(generator, QuestionSetGenerator)

    def test_returns_validated_question_set(self):
        generator, client = make_generator(json.dumps(wire_payload()))
        qs = generator.generate_question_set("Bài 1: Tập hợp", "Toán 6")
        assert len(qs.part_a) == 12
        call = client.models.calls[0]
        assert call["model"] == "test-model"
        assert "Bài 1: Tập hợp" in call["contents"]
        assert "Toán 6" in call["contents"]
        assert call["config"].response_mime_type == "application/json"

    def test_fills_missing_topic(self):
        payload = wire_payload()
        payload["topic"] = ""
        generator, _ = make_generator(json.dumps(payload))
        assert generator.generate_question_set("Bài 9").topic == "Bài 9"

    def test_retries_transient_failure(self):
        generator, client = make_generator(
            RuntimeError("503"), "", json.dumps(wire_payload())
        )
        qs = generator.generate_question_set("Bài 1: Tập hợp")
        assert qs.statement_count == 16
        assert len(client.models.calls) == 3

    def test_retries_malformed_json(self):
        generator, client = make_generator("{oops", json.dumps(wire_payload()))
        generator.generate_question_set("Bài 1: Tập hợp")
        assert len(client.models.calls) == 2

    def test_gives_up_with_content_unavailable(self):
        generator, client = make_generator(
            RuntimeError("a"), RuntimeError("b"), RuntimeError("c"), max_retries=3
        )
        with pytest.raises(ContentUnavailable):
            generator.generate_question_set("Bài 1: Tập hợp")
        assert len(client.models.calls) == 3

    def test_strict_mode_rejects_contract_deviation(self):
        generator, _ = make_generator(json.dumps(wire_payload(part3=5)), max_retries=1, strict=True)
        with pytest.raises(ContentUnavailable):
            generator.generate_question_set("Bài 1: Tập hợp")

    def test_missing_api_key(self, monkeypatch):
        for name in ("GEMINI_API_KEY", "VITE_GEMINI_API_KEY", "API_KEY"):
            monkeypatch.delenv(name, raising=False)
        generator = GeminiQuizGenerator(sleep_seconds=0)
        with pytest.raises(ContentUnavailable, match="GEMINI_API_KEY"):
            generator.generate_question_set("Bài 1: Tập hợp")

    def test_prompt_mentions_contract(self):
        generator, _ = make_generator()
        prompt = generator.build_prompt("Bài 3", "Toán 6")
        assert "12 câu hỏi" in prompt
        assert "6 câu hỏi" in prompt
        assert '"correctAnswerIndex"' in prompt


class TestPromptLoader:

    def test_packaged_prompt(self):
        prompt = load_prompt("quiz_generation")
        assert "system" in prompt
        assert "{topic}" in prompt["user_template"]
        assert "quiz_generation" in get_available_prompts()

    def test_missing_prompt(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_prompt("nope", prompts_dir=tmp_path)

    def test_incomplete_prompt(self, tmp_path):
        (tmp_path / "partial.yaml").write_text(yaml.safe_dump({"system": "x"}), encoding="utf-8")
        with pytest.raises(ValueError, match="user_template"):
            load_prompt("partial", prompts_dir=tmp_path)

    def test_available_prompts_missing_dir(self, tmp_path):
        assert get_available_prompts(tmp_path / "missing") == []

    def test_format_prompt(self):
        assert format_prompt("Bài {n}", n=3) == "Bài 3"

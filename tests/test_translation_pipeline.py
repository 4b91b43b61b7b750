import asyncio

import pytest

from flashdeck.exceptions import (
    InputTooLongError,
    NetworkError,
    ProviderError,
    RateLimitedError,
    ValidationError,
)
from flashdeck.services import DisplayResult, TranslationPipeline

from conftest import FakeTranslator


@pytest.fixture
def pipeline(translator, gate):
    return TranslationPipeline(translator, gate=gate)


def test_translate_derives_two_letter_codes(pipeline, translator):
    translator.responses[("hello", "en", "ru")] = "привет"

    result = asyncio.run(pipeline.translate("  hello ", "en-US", "ru-RU"))

    assert translator.calls == [("hello", "en", "ru")]
    assert result.translated_text == "привет"
    assert result.source_text == "hello"
    assert result.from_lang == "en-US"
    assert result.to_lang == "ru-RU"


@pytest.mark.parametrize("text", ["", "   "])
def test_blank_input_rejected_without_network(pipeline, translator, text):
    with pytest.raises(ValidationError):
        asyncio.run(pipeline.translate(text, "en-US", "tr-TR"))
    assert translator.calls == []


def test_input_over_100_chars_fails_fast(pipeline, translator):
    asyncio.run(pipeline.translate("a" * 100, "en-US", "tr-TR"))

    pipeline.gate.reset()
    with pytest.raises(InputTooLongError) as exc_info:
        asyncio.run(pipeline.translate("a" * 101, "en-US", "tr-TR"))

    assert exc_info.value.length == 101
    assert exc_info.value.limit == 100
    assert len(translator.calls) == 1


def test_too_long_input_does_not_touch_the_gate(pipeline):
    with pytest.raises(InputTooLongError):
        asyncio.run(pipeline.translate("a" * 150, "en-US", "tr-TR"))
    assert not pipeline.is_cooling
    assert not pipeline.gate.in_flight


def test_second_call_within_cooldown_is_rate_limited(pipeline, translator, clock):
    asyncio.run(pipeline.translate("one", "en-US", "tr-TR"))

    clock.advance(4.0)
    with pytest.raises(RateLimitedError) as exc_info:
        asyncio.run(pipeline.translate("two", "en-US", "tr-TR"))

    assert exc_info.value.retry_after == pytest.approx(1.0)
    assert len(translator.calls) == 1


def test_call_after_cooldown_succeeds(pipeline, translator, clock):
    asyncio.run(pipeline.translate("one", "en-US", "tr-TR"))
    clock.advance(5.0)
    asyncio.run(pipeline.translate("two", "en-US", "tr-TR"))
    assert len(translator.calls) == 2


@pytest.mark.parametrize("error", [NetworkError("offline"), ProviderError("Bad language pair", status=400)])
def test_failure_propagates_and_does_not_start_cooldown(pipeline, translator, error):
    translator.error = error

    with pytest.raises(type(error)):
        asyncio.run(pipeline.translate("hello", "en-US", "tr-TR"))

    assert not pipeline.is_cooling
    translator.error = None
    asyncio.run(pipeline.translate("hello", "en-US", "tr-TR"))
    assert pipeline.is_cooling


def test_rejected_call_does_not_rearm_cooldown(pipeline, clock):
    asyncio.run(pipeline.translate("one", "en-US", "tr-TR"))
    clock.advance(3.0)
    with pytest.raises(RateLimitedError):
        asyncio.run(pipeline.translate("two", "en-US", "tr-TR"))

    clock.advance(2.0)
    asyncio.run(pipeline.translate("three", "en-US", "tr-TR"))


def test_concurrent_calls_only_one_reaches_provider(gate):
    """Test two overlapping calls cannot both pass the gate."""

    class SlowTranslator(FakeTranslator):
        async def call(self, text, source_code, target_code):
            await asyncio.sleep(0.01)
            return await super().call(text, source_code, target_code)

    translator = SlowTranslator()
    pipeline = TranslationPipeline(translator, gate=gate)

    async def both():
        return await asyncio.gather(
            pipeline.translate("one", "en-US", "tr-TR"),
            pipeline.translate("two", "en-US", "tr-TR"),
            return_exceptions=True,
        )

    results = asyncio.run(both())

    rejected = [r for r in results if isinstance(r, RateLimitedError)]
    assert len(rejected) == 1
    assert rejected[0].in_flight
    assert "already in progress" in str(rejected[0])
    assert "0.0s" not in str(rejected[0])
    assert len(translator.calls) == 1


def test_post_process_latin_output():
    assert TranslationPipeline.post_process("hello") == ("hello", None)


def test_post_process_cyrillic_output():
    display = TranslationPipeline.post_process("привет")
    assert display == ("привет", "privet")
    assert display.label == "привет (privet)"


def test_post_process_normalizes_decomposed_text():
    """Test e + combining diaeresis is treated as a single yo."""
    display = TranslationPipeline.post_process("\u0435\u0308лка")
    assert display == ("\u0451лка", "yolka")


def test_translation_scenarios(pipeline, translator, clock):
    """Test the two round trips between Russian and English."""
    translator.responses[("привет", "ru", "en")] = "hello"
    translator.responses[("hello", "en", "ru")] = "привет"

    result = asyncio.run(pipeline.translate("привет", "ru-RU", "en-US"))
    assert pipeline.post_process(result.translated_text) == ("hello", None)

    clock.advance(5)
    display = asyncio.run(pipeline.translate_for_display("hello", "en-US", "ru-RU"))
    assert display == DisplayResult("привет", "privet")

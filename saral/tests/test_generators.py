import random

import pytest


SENTENCES = ["Rain helps crops grow", "Farmers need good seeds"]
KEYWORDS = ["rain", "crops", "farmers", "seeds"]


@pytest.fixture
def outputs():
    from saral.generators.formats import FormatGenerator

    return FormatGenerator(rng=random.Random(42)).generate(SENTENCES, KEYWORDS)


class TestFormatGenerator:
    def test_grade5_joins_sentences_and_appends_closing(self, outputs):
        from saral.generators.formats import TEMPLATES

        assert outputs.grade5_explanation.startswith(
            "Rain helps crops grow. Farmers need good seeds."
        )
        assert outputs.grade5_explanation.endswith(TEMPLATES["grade5_closing"])

    def test_bullets_one_per_sentence_plus_topics(self, outputs):
        assert outputs.bullet_summary == [
            "Rain helps crops grow.",
            "Farmers need good seeds.",
            "Key topics: rain, crops, farmers.",
        ]

    def test_bullets_are_capitalized_and_terminated(self):
        from saral.generators.formats import FormatGenerator

        bullets = FormatGenerator().bullets(["water is life", "Is it clean?"], [])
        assert bullets[0] == "Water is life."
        assert bullets[1] == "Is it clean?"

    def test_bullets_padded_to_minimum(self):
        from saral.generators.formats import FormatGenerator, TEMPLATES

        bullets = FormatGenerator().bullets(["Only one point"], [])
        assert len(bullets) == 3
        assert bullets[1:] == [TEMPLATES["bullet_filler"]] * 2

    def test_bullets_truncated_to_maximum(self):
        from saral.generators.formats import FormatGenerator

        sentences = [f"Point number {i} matters" for i in range(9)]
        bullets = FormatGenerator().bullets(sentences, KEYWORDS)
        assert len(bullets) == 7
        assert not any(b.startswith("Key topics") for b in bullets)

    def test_no_topics_bullet_once_five_bullets_exist(self):
        from saral.generators.formats import FormatGenerator

        sentences = [f"Point number {i} matters" for i in range(5)]
        bullets = FormatGenerator().bullets(sentences, KEYWORDS)
        assert len(bullets) == 5

    def test_whatsapp_uses_phrase_banks_and_first_two_sentences(self, outputs):
        from saral.generators.formats import GREETINGS, EMOJIS

        greeting = outputs.whatsapp_version.split("!")[0]
        assert greeting in GREETINGS
        assert "Rain helps crops grow. Farmers need good seeds." in outputs.whatsapp_version
        assert any(e in outputs.whatsapp_version for e in EMOJIS)
        assert outputs.whatsapp_version.endswith("Simple hai!")

    def test_whatsapp_keeps_only_two_sentences(self):
        from saral.generators.formats import FormatGenerator

        result = FormatGenerator(rng=random.Random(1)).generate(
            ["First point here", "Second point here", "Third point here"], []
        )
        assert "Third point here" not in result.whatsapp_version
        assert "Third point here" in result.voice_script

    def test_voice_script_has_pause_between_segments(self, outputs):
        from saral.generators.formats import PAUSE_MARKER, TEMPLATES

        assert outputs.voice_script.count(PAUSE_MARKER) == 3
        assert outputs.voice_script.startswith(TEMPLATES["voice_intro"])
        assert outputs.voice_script.endswith(TEMPLATES["voice_outro"])

    def test_regional_version_is_code_switched(self, outputs):
        from saral.generators.formats import CLOSINGS

        assert outputs.regional_version.startswith(
            "Dekho yaar, main concept yeh hai ki Rain helps crops grow. Farmers need good seeds."
        )
        assert any(outputs.regional_version.endswith(f"{c}!") for c in CLOSINGS)

    def test_same_seed_same_output(self):
        from saral.generators.formats import FormatGenerator

        a = FormatGenerator().generate(SENTENCES, KEYWORDS, rng=random.Random(7))
        b = FormatGenerator().generate(SENTENCES, KEYWORDS, rng=random.Random(7))
        assert a == b

    def test_empty_sentences_still_produce_every_field(self):
        from saral.generators.formats import FormatGenerator, PAUSE_MARKER

        result = FormatGenerator(rng=random.Random(0)).generate([], [])
        assert result.grade5_explanation
        assert len(result.bullet_summary) == 3
        assert result.whatsapp_version
        assert PAUSE_MARKER in result.voice_script
        assert "yaar" in result.regional_version

    def test_to_dict(self, outputs):
        data = outputs.to_dict()
        assert set(data) == {
            "grade5_explanation",
            "bullet_summary",
            "whatsapp_version",
            "voice_script",
            "regional_version",
        }
        assert data["bullet_summary"] == outputs.bullet_summary


class TestOutputValidator:
    def _validate(self, outputs, **overrides):
        from saral.generators.validator import OutputValidator

        fields = {
            "grade5": outputs.grade5_explanation,
            "bullets": outputs.bullet_summary,
            "whatsapp": outputs.whatsapp_version,
            "voice": outputs.voice_script,
            "regional": outputs.regional_version,
        }
        fields.update(overrides)
        return OutputValidator().validate(**fields)

    def test_generated_outputs_are_valid(self, outputs):
        result = self._validate(outputs)
        assert result.valid
        assert result.errors == []

    def test_function_declaration_is_flagged(self, outputs):
        result = self._validate(outputs, grade5="Call function foo() to start.")
        assert not result.valid
        assert "Grade 5 contains code fragments" in result.errors

    def test_json_in_bullet_is_flagged(self, outputs):
        bullets = list(outputs.bullet_summary)
        bullets[1] = 'Data {"name": "Ravi"} here.'
        result = self._validate(outputs, bullets=bullets)
        assert "Bullet 2 contains structured data patterns" in result.errors

    def test_placeholder_is_flagged(self, outputs):
        result = self._validate(outputs, whatsapp="Look at [object Object] now.")
        assert "WhatsApp contains bracketed objects" in result.errors

    def test_table_pipes_are_flagged(self):
        from saral.generators.validator import OutputValidator

        assert OutputValidator.contains_structured_data("| name | age |")
        assert OutputValidator.contains_structured_data("- status: done")

    def test_bullet_count_bounds(self, outputs):
        result = self._validate(outputs, bullets=["One point.", "Two points."])
        assert not result.valid
        assert any("3-7" in e for e in result.errors)

        result = self._validate(outputs, bullets=["Point."] * 8)
        assert any("3-7" in e for e in result.errors)

    def test_voice_needs_pause_marker(self, outputs):
        result = self._validate(outputs, voice="Hello friends. This has no pauses.")
        assert "Voice script must include pause markers" in result.errors

    def test_regional_needs_marker_word(self, outputs):
        result = self._validate(outputs, regional="This is plain English text.")
        assert "Regional version must contain Hinglish words" in result.errors

    def test_marker_must_be_whole_word(self):
        from saral.generators.validator import OutputValidator

        v = OutputValidator()
        assert not v.contains_code_switching("The national banana harvest")
        assert v.contains_code_switching("Theek hai, let us go")

    def test_long_sentences_are_flagged(self, outputs):
        long_text = " ".join(["word"] * 25) + "."
        result = self._validate(outputs, grade5=long_text)
        assert any("too long sentences" in e for e in result.errors)

    def test_ordinary_prose_is_not_code(self):
        from saral.generators.validator import OutputValidator

        assert not OutputValidator.contains_code("The class teacher praised the students.")
        assert not OutputValidator.contains_code("India will import rice from Thailand.")
        assert OutputValidator.contains_code("const total = 5")
        assert OutputValidator.contains_code("export default App")
        assert OutputValidator.contains_code("Click <button> here")

    def test_errors_are_aggregated(self, outputs):
        result = self._validate(
            outputs,
            grade5="function foo() is here.",
            voice="No pauses here.",
            regional="Plain text only.",
        )
        assert len(result.errors) >= 3

    def test_missing_fields_are_reported_not_raised(self):
        from saral.generators.validator import OutputValidator

        result = OutputValidator().validate(None, None, None, None, None)
        assert not result.valid
        assert "Bullet summary must have 3-7 items (got 0)" in result.errors
        assert "Grade 5 is empty" in result.errors
        assert "Voice script must include pause markers" in result.errors

    def test_average_sentence_length(self):
        from saral.generators.validator import average_sentence_length

        assert average_sentence_length("") == 0
        assert average_sentence_length("One two three. Four five.") == 3

import random
import re
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from ..analyzers.base import FormattedOutputs
from ..utils.data import load_json

logger = logging.getLogger(__name__)

MIN_BULLETS = 3
MAX_BULLETS = 7
TOPIC_BULLET_LIMIT = 5
TOPIC_KEYWORDS = 3
PREVIEW_SENTENCES = 2

_DEFAULT_TEMPLATES = {
    "grade5_closing": "This is like explaining cricket to a friend - simple and clear!",
    "bullet_topics": "Key topics",
    "bullet_filler": "Additional key point from the content.",
    "whatsapp_prompt": "Makes sense",
    "whatsapp_signoff": "Simple hai!",
    "voice_intro": "Hello friends. Let me share something important with you.",
    "voice_outro": "So that's the main idea. I hope this was helpful!",
    "pause_marker": "[Pause]",
    "regional_intro": "Dekho yaar, main concept yeh hai ki",
    "regional_bridge": "Samjhe? It's actually quite simple once you understand.",
}

_TERMINAL_RE = re.compile(r"[.!?]$")


def _load_phrase_banks():
    data = load_json("hinglish.json")
    templates = dict(_DEFAULT_TEMPLATES)
    templates.update(data.get("templates", {}))
    return (
        tuple(data.get("markers", [])) or ("yaar", "dekho", "samjhe"),
        tuple(data.get("greeting", [])) or ("Dekho",),
        tuple(data.get("confirmation", [])) or ("samjhe?",),
        tuple(data.get("closing", [])) or ("Bas itna hi",),
        tuple(data.get("emojis", [])) or ("😊",),
        MappingProxyType(templates),
    )


(
    CODE_SWITCH_MARKERS,
    GREETINGS,
    CONFIRMATIONS,
    CLOSINGS,
    EMOJIS,
    TEMPLATES,
) = _load_phrase_banks()

PAUSE_MARKER: str = TEMPLATES["pause_marker"]


def _terminate(text: str) -> str:
    text = text.strip()
    if text and not _TERMINAL_RE.search(text):
        text += "."
    return text


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


class FormatGenerator:
    """
    Expands one set of simplified sentences into the five output formats.

    Every format is built from the same sentences so that they share the
    same core meaning. Randomness is used only to pick phrases from the
    Hinglish phrase banks; pass a seeded random.Random to make the result
    reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        templates: Optional[Mapping[str, str]] = None,
    ):
        self._rng = rng
        self.templates = TEMPLATES if templates is None else {**TEMPLATES, **templates}

    @property
    def pause_marker(self) -> str:
        return self.templates["pause_marker"]

    def generate(
        self,
        sentences: Sequence[str],
        keywords: Sequence[str],
        rng: Optional[random.Random] = None,
    ) -> FormattedOutputs:
        rng = rng or self._rng or random.Random()
        sentences = [s.strip() for s in sentences if s and s.strip()]

        # Draw order is fixed so a seeded rng always yields the same picks
        greeting = rng.choice(GREETINGS)
        opening_emoji = rng.choice(EMOJIS)
        closing_emoji = rng.choice(EMOJIS)
        confirmation = rng.choice(CONFIRMATIONS)
        regional_closing = rng.choice(CLOSINGS)

        return FormattedOutputs(
            grade5_explanation=self.grade5(sentences),
            bullet_summary=self.bullets(sentences, keywords),
            whatsapp_version=self.whatsapp(
                sentences, greeting, opening_emoji, confirmation, closing_emoji
            ),
            voice_script=self.voice_script(sentences),
            regional_version=self.regional(sentences, regional_closing),
        )

    def grade5(self, sentences: Sequence[str]) -> str:
        closing = self.templates["grade5_closing"]
        narrative = _terminate(". ".join(sentences))
        return f"{narrative} {closing}" if narrative else closing

    def bullets(self, sentences: Sequence[str], keywords: Sequence[str]) -> List[str]:
        bullets = [_terminate(_capitalize(s)) for s in sentences]

        if len(bullets) < TOPIC_BULLET_LIMIT and keywords:
            topics = ", ".join(keywords[:TOPIC_KEYWORDS])
            bullets.append(f"{self.templates['bullet_topics']}: {topics}.")

        while len(bullets) < MIN_BULLETS:
            bullets.append(self.templates["bullet_filler"])

        return bullets[:MAX_BULLETS]

    def whatsapp(
        self,
        sentences: Sequence[str],
        greeting: str,
        opening_emoji: str,
        confirmation: str,
        closing_emoji: str,
    ) -> str:
        parts = [f"{greeting}! {opening_emoji}"]
        content = _terminate(". ".join(sentences[:PREVIEW_SENTENCES]))
        if content:
            parts.append(content)
        parts.append(
            f"{self.templates['whatsapp_prompt']} {confirmation} "
            f"{closing_emoji} {self.templates['whatsapp_signoff']}"
        )
        return "\n\n".join(parts)

    def voice_script(self, sentences: Sequence[str]) -> str:
        pause = f" {self.pause_marker} "
        segments = [self.templates["voice_intro"]]
        segments.extend(_terminate(s) for s in sentences)
        segments.append(self.templates["voice_outro"])
        return pause.join(segments)

    def regional(self, sentences: Sequence[str], closing: str) -> str:
        content = ". ".join(sentences[:PREVIEW_SENTENCES])
        intro = self.templates["regional_intro"]
        opening = _terminate(f"{intro} {content}") if content else _terminate(intro)
        return f"{opening} {self.templates['regional_bridge']} {closing}!"

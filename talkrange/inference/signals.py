"""
Rule-based lexical signal extraction

Each signal is an independent regex test over the raw utterance, so tags
co-occur freely. The default pattern set targets Korean workplace speech;
other locales can pass their own ``SignalPattern`` list.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

SILENCE = "silence"


@dataclass(frozen=True)
class SignalPattern:
    """A signal tag and the pattern that detects it"""
    tag: str
    pattern: "re.Pattern[str]"

    @classmethod
    def compile(cls, tag: str, regex: str) -> "SignalPattern":
        return cls(tag=tag, pattern=re.compile(regex))


KOREAN_PATTERNS: Sequence[SignalPattern] = (
    SignalPattern.compile("question", r"\?|나요|까\?"),
    SignalPattern.compile("collective_subject", r"(다들|모두|우리\s*|전체)"),
    SignalPattern.compile("immediacy", r"(지금|바로|당장|오늘 안)"),
    SignalPattern.compile("softener", r"(가능하면|좀|아무래도|혹시|괜찮으시다면)"),
    SignalPattern.compile("authority", r"(당연히|필수|규정|원칙|반드시)"),
    SignalPattern.compile("gratitude", r"(감사|고맙|고마워|덕분)"),
    SignalPattern.compile("apology", r"(미안|죄송|송구)"),
    SignalPattern.compile("suggestion", r"(해볼까|어떨까요|하자|합시다|어때)"),
    SignalPattern.compile("boundary_push", r"(무조건|해야만|끝까지|버티)"),
    SignalPattern.compile("care", r"(괜찮|걱정|살펴|도와줄게)"),
)


class SignalExtractor:
    """Map free text to the set of lexical signal tags it contains"""

    def __init__(self, patterns: Optional[Iterable[SignalPattern]] = None):
        self.patterns: List[SignalPattern] = list(KOREAN_PATTERNS if patterns is None else patterns)

    @property
    def tags(self) -> List[str]:
        """All tags this extractor can emit"""
        return [p.tag for p in self.patterns] + [SILENCE]

    def extract(self, utterance: Optional[str]) -> List[str]:
        """Return the deduplicated signal tags found in ``utterance``"""
        text = utterance or ""
        signals: List[str] = []

        for item in self.patterns:
            if item.tag not in signals and item.pattern.search(text):
                signals.append(item.tag)

        if not text.strip() and SILENCE not in signals:
            signals.append(SILENCE)

        logger.debug(f"Extracted signals {signals} from {len(text)} chars")
        return signals

    def extract_all(self, texts: Iterable[Optional[str]]) -> List[str]:
        """Union of signals over several texts, in order of first appearance"""
        seen: List[str] = []
        for text in texts:
            for tag in self.extract(text):
                if tag not in seen:
                    seen.append(tag)
        return seen


def extract_signals(utterance: Optional[str]) -> List[str]:
    """Extract signals with the default Korean pattern set"""
    return SignalExtractor().extract(utterance)

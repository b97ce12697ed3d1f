"""
Phrase templates for recommended actions

Templates live in a YAML data file so phrasings and locales can be swapped
without touching the EV scorer.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "data" / "templates.korean.yaml"


@dataclass(frozen=True)
class TemplateEntry:
    roles: Tuple[str, ...]
    action: str
    text: str

    def matches(self, role: str, action: str) -> bool:
        lowered = role.lower()
        return self.action == action and any(item.lower() in lowered for item in self.roles)


class TemplateCatalog:
    """First-match lookup of a phrase by (role, action), polished per culture"""

    def __init__(self,
                 entries: Sequence[TemplateEntry],
                 fallback: str,
                 culture_suffix: Optional[Mapping[str, str]] = None):
        self.entries: List[TemplateEntry] = list(entries)
        self.fallback = fallback
        self.culture_suffix: Dict[str, str] = dict(culture_suffix or {})

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "TemplateCatalog":
        template_path = Path(path) if path else DEFAULT_TEMPLATE_PATH
        try:
            with open(template_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load templates from {template_path}: {e}")

        fallback = raw.get('fallback')
        if not fallback:
            raise ConfigurationError(f"Template file {template_path} has no fallback phrase")

        entries = []
        for item in raw.get('templates', []):
            try:
                entries.append(TemplateEntry(tuple(item['roles']), item['action'], item['text']))
            except (KeyError, TypeError):
                raise ConfigurationError(f"Malformed template entry in {template_path}: {item}")

        logger.info(f"Loaded {len(entries)} phrase templates from {template_path.name}")
        return cls(entries, fallback, raw.get('culture_suffix'))

    def polish(self, culture: str, text: str) -> str:
        return text + self.culture_suffix.get(culture, "")

    def render(self, role: str, action: str, culture: str) -> str:
        """Phrase for ``action`` addressed to ``role``; falls back to a generic phrase"""
        for entry in self.entries:
            if entry.matches(role or "", action):
                return self.polish(culture, entry.text)
        return self.polish(culture, self.fallback)

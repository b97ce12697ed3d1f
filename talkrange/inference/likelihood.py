"""
Signal likelihood table p(signal | intent)

Known signals map to an authored likelihood vector loaded from YAML.
Unknown signals get a smoothed fallback:

    smoothing * uniform + (1 - smoothing) * background

``background`` defaults to the uniform vector, which makes the fallback an
uninformative signal that leaves the posterior unchanged.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

import yaml

from ..core.exceptions import ConfigurationError
from ..core.types import INTENTS, LikelihoodVector

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_TABLE_PATH = DATA_DIR / "likelihood.korean.yaml"

DEFAULT_SMOOTHING = 0.15


class LikelihoodTable:
    """Read-only lookup from signal tag to per-intent likelihood weights"""

    def __init__(self,
                 table: Mapping[str, Mapping[str, float]],
                 intents: Sequence[str] = INTENTS,
                 smoothing: float = DEFAULT_SMOOTHING):
        if not 0.0 <= smoothing <= 1.0:
            raise ConfigurationError(f"smoothing must lie in [0, 1], got {smoothing}")
        self.intents = tuple(intents)
        self.smoothing = smoothing
        self._table: Dict[str, LikelihoodVector] = {
            signal: self._validate(signal, vector) for signal, vector in table.items()
        }

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None, **kwargs) -> "LikelihoodTable":
        """Load a likelihood table from a YAML mapping of signal -> intent -> weight"""
        table_path = Path(path) if path else DEFAULT_TABLE_PATH
        try:
            with open(table_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load likelihood table from {table_path}: {e}")
        if not isinstance(raw, dict) or not raw:
            raise ConfigurationError(f"Likelihood table {table_path} must be a non-empty mapping")

        logger.info(f"Loaded {len(raw)} signal likelihoods from {table_path.name}")
        return cls(raw, **kwargs)

    def _validate(self, signal: str, vector: Mapping[str, float]) -> LikelihoodVector:
        if not isinstance(vector, Mapping):
            raise ConfigurationError(f"Likelihood for '{signal}' must be a mapping")
        missing = [intent for intent in self.intents if intent not in vector]
        if missing:
            raise ConfigurationError(f"Likelihood for '{signal}' is missing intents {missing}")
        validated: LikelihoodVector = {}
        for intent in self.intents:
            try:
                weight = float(vector[intent])
            except (TypeError, ValueError):
                raise ConfigurationError(f"Likelihood {signal}/{intent} is not a number")
            if not 0.0 < weight <= 1.0:
                raise ConfigurationError(f"Likelihood {signal}/{intent}={weight} outside (0, 1]")
            validated[intent] = weight
        return validated

    def __contains__(self, signal: str) -> bool:
        return signal in self._table

    @property
    def signals(self) -> Sequence[str]:
        return tuple(self._table)

    def lookup(self, signal: str, background: Optional[Mapping[str, float]] = None) -> LikelihoodVector:
        """Likelihood vector for ``signal``; never raises.

        Args:
            signal: Signal tag
            background: Distribution the fallback blends toward for unknown
                signals. Uniform when omitted.

        Returns:
            Mapping from every intent to a likelihood weight
        """
        if signal in self._table:
            return dict(self._table[signal])

        uniform = 1.0 / len(self.intents)
        base = background or {}
        fallback = {
            intent: self.smoothing * uniform + (1.0 - self.smoothing) * base.get(intent, uniform)
            for intent in self.intents
        }
        logger.debug(f"Unknown signal '{signal}', using smoothed fallback")
        return fallback

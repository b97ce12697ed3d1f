"""
TalkRange - Conversational Intent Range Estimator
=================================================

Estimates a probability distribution over conversational intents from a
role, a time context, an utterance and its history, then ranks response
actions by an expected-value heuristic.

Core Components:
- Rule-based lexical signal extraction
- Role/time/culture conditioned priors
- Log-space Bayesian update with smoothed likelihoods
- Expected-value action scoring with phrase templates
"""

__version__ = "0.1.0"
__author__ = "TalkRange Project"

from .core.system import TalkRangeSystem, RangeAnalysis
from .core.config import Config, Settings, load_settings
from .core.exceptions import TalkRangeError

__all__ = [
    'TalkRangeSystem',
    'RangeAnalysis',
    'Config',
    'Settings',
    'load_settings',
    'TalkRangeError'
]

"""
Intent inference components
"""

from .signals import SignalExtractor, SignalPattern, extract_signals
from .likelihood import LikelihoodTable
from .rules import KeywordRule, KeywordRuleSet, PriorRules
from .prior import PriorModel
from .engine import InferenceEngine

__all__ = [
    'SignalExtractor',
    'SignalPattern',
    'extract_signals',
    'LikelihoodTable',
    'KeywordRule',
    'KeywordRuleSet',
    'PriorRules',
    'PriorModel',
    'InferenceEngine',
]

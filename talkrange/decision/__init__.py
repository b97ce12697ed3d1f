"""
Action scoring components
"""

from .actions import ACTION_DEFINITIONS, RELATIONSHIP_WEIGHT, culture_bias
from .templates import TemplateCatalog, TemplateEntry
from .ev import EVScorer

__all__ = [
    'ACTION_DEFINITIONS',
    'RELATIONSHIP_WEIGHT',
    'culture_bias',
    'TemplateCatalog',
    'TemplateEntry',
    'EVScorer',
]

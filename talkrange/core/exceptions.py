"""
Custom exceptions for TalkRange
"""

class TalkRangeError(Exception):
    """Base exception for TalkRange"""
    pass

class ConfigurationError(TalkRangeError):
    """Configuration and data-resource errors"""
    pass

class ValidationError(TalkRangeError):
    """Malformed caller input outside the HTTP layer (profiles, scenario files)"""
    pass

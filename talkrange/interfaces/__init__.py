"""
Command-line interface for TalkRange
"""

"""
Rule-based sentiment scoring, explanation, session history and report export.
"""

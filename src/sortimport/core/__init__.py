"""
Import classification, ordering and rewriting engine.
"""

"""Core primitives: ring storage, the outcome tracker, outlook bands, registry.
"""

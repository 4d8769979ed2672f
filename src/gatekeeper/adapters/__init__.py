"""Adapters layer - Entry points for operators."""

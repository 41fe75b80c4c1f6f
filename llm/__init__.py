"""LLM integration module for expense extraction."""

from llm.factory import get_extractor

__all__ = ["get_extractor"]

"""Advice generation package."""

from .generator import AdviceGenerator, AdviceResult, build_advice_prompt, fallback_advice

__all__ = [
    "AdviceGenerator",
    "AdviceResult",
    "build_advice_prompt",
    "fallback_advice",
]

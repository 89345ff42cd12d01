"""
LLM Narrative Module

Optional AI narrative for a MAPA study. NON-DECISIONAL: it explains
measurements already classified by the deterministic engine; any failure
falls back to that engine at the call site.
"""
from .gemini_client import NarrativeClient, NarrativeConfig, NarrativeResponse
from .prompts import SYSTEM_INSTRUCTION, build_analysis_prompt

__all__ = [
    "NarrativeClient",
    "NarrativeConfig",
    "NarrativeResponse",
    "SYSTEM_INSTRUCTION",
    "build_analysis_prompt",
]

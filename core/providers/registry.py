"""LLM provider factory and model catalog.

Central registry of the Gemini models the app offers and a factory
function to instantiate a provider for a given credential and model.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base import LLMProvider

# ---------------------------------------------------------------------------
# Model catalog: authoritative list of supported models
# ---------------------------------------------------------------------------

DEFAULT_MODEL = "gemini-2.5-flash"

MODEL_CATALOG: List[Dict[str, Any]] = [
    {
        "provider": "google",
        "provider_label": "Gemini",
        "model_id": "gemini-2.5-flash",
        "label": "Gemini 2.5 Flash",
        "tier": "standard",
        "description": "Fast, balanced quality. Default for fact sheets.",
    },
    {
        "provider": "google",
        "provider_label": "Gemini",
        "model_id": "gemini-2.5-flash-lite",
        "label": "Gemini 2.5 Flash-Lite",
        "tier": "fast",
        "description": "Lowest latency and cost.",
    },
    {
        "provider": "google",
        "provider_label": "Gemini",
        "model_id": "gemini-2.5-pro",
        "label": "Gemini 2.5 Pro",
        "tier": "premium",
        "description": "Highest quality, slower.",
    },
    {
        "provider": "google",
        "provider_label": "Gemini",
        "model_id": "gemini-2.0-flash",
        "label": "Gemini 2.0 Flash",
        "tier": "fast",
        "description": "Previous generation flash model.",
    },
]


def get_model_catalog() -> List[Dict[str, Any]]:
    """Return the full model catalog for UI/CLI consumption."""
    return MODEL_CATALOG


def get_model_ids() -> List[str]:
    """Return catalog model ids, default model first."""
    ids = [m["model_id"] for m in MODEL_CATALOG]
    ids.sort(key=lambda mid: mid != DEFAULT_MODEL)
    return ids


def get_model_label(model_id: str) -> str:
    for m in MODEL_CATALOG:
        if m["model_id"] == model_id:
            return m["label"]
    return model_id


def validate_model(model_id: str) -> bool:
    """Check if a model id is in the catalog."""
    return any(m["model_id"] == model_id for m in MODEL_CATALOG)


# ---------------------------------------------------------------------------
# Provider factory
# ---------------------------------------------------------------------------

def get_provider(api_key: str, model: Optional[str] = None) -> LLMProvider:
    """Create and return an LLMProvider for the given credential/model.

    Parameters
    ----------
    api_key :
        Caller-supplied Gemini API key.
    model :
        Optional model ID override. Passed as default_model to the provider.

    Raises
    ------
    ValueError
        If the model is not in the catalog.
    """
    model = model or DEFAULT_MODEL
    if not validate_model(model):
        raise ValueError(
            f"Unknown Gemini model: {model!r}. "
            f"Supported: {', '.join(get_model_ids())}"
        )

    from .google_provider import GoogleProvider
    return GoogleProvider(api_key=api_key, default_model=model)

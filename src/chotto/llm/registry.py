"""Static registry of the models a user can pick from.

The registry is defined once at import time and never mutated.
"""

from ..errors import ModelNotRegistered
from .models import ModelCategory, ModelDescriptor, Provider

MODELS: tuple[ModelDescriptor, ...] = (
    # Text models
    ModelDescriptor(id="gpt-4o", label="GPT-4o", provider=Provider.OPENAI, category=ModelCategory.TEXT),
    ModelDescriptor(id="gpt-5", label="GPT-5 (Preview)", provider=Provider.OPENAI, category=ModelCategory.TEXT),
    ModelDescriptor(
        id="gpt-5-thinking", label="GPT-5 Thinking", provider=Provider.OPENAI, category=ModelCategory.TEXT
    ),
    ModelDescriptor(
        id="gemini-1.5-pro", label="Gemini 1.5 Pro", provider=Provider.GOOGLE, category=ModelCategory.TEXT
    ),
    ModelDescriptor(
        id="gemini-3.0-pro", label="Gemini 3.0 Pro", provider=Provider.GOOGLE, category=ModelCategory.TEXT
    ),
    ModelDescriptor(
        id="gemini-3.0-pro-thinking",
        label="Gemini 3.0 Pro Thinking",
        provider=Provider.GOOGLE,
        category=ModelCategory.TEXT,
    ),
    ModelDescriptor(
        id="claude-3-5-sonnet",
        label="Claude 3.5 Sonnet",
        provider=Provider.ANTHROPIC,
        category=ModelCategory.TEXT,
    ),
    ModelDescriptor(
        id="claude-4-6-sonnet",
        label="Claude 4.6 Sonnet",
        provider=Provider.ANTHROPIC,
        category=ModelCategory.TEXT,
    ),
    ModelDescriptor(
        id="claude-4-6-sonnet-thinking",
        label="Claude 4.6 Sonnet Thinking",
        provider=Provider.ANTHROPIC,
        category=ModelCategory.TEXT,
    ),
    # Image generation models
    ModelDescriptor(id="dall-e-3", label="DALL·E 3", provider=Provider.OPENAI, category=ModelCategory.IMAGE),
    ModelDescriptor(
        id="nano-banana", label="Nano Banana", provider=Provider.OPENAI, category=ModelCategory.IMAGE
    ),
)

_BY_ID: dict[str, ModelDescriptor] = {model.id: model for model in MODELS}

if len(_BY_ID) != len(MODELS):
    raise AssertionError("Duplicate model ids in registry")

DEFAULT_MODEL_ID = "gpt-4o"


def resolve(model_id: str) -> ModelDescriptor:
    """Look up a registered model.

    Args:
        model_id: Internal model identifier

    Returns:
        The model's descriptor

    Raises:
        ModelNotRegistered: If the id is unknown
    """
    try:
        return _BY_ID[model_id]
    except KeyError:
        raise ModelNotRegistered(model_id) from None


def is_registered(model_id: str) -> bool:
    """Check whether a model id is known."""
    return model_id in _BY_ID


def list_models(category: ModelCategory | None = None) -> list[ModelDescriptor]:
    """List registered models in display order, optionally filtered by category."""
    return [m for m in MODELS if category is None or m.category == category]


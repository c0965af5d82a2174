"""Shared constants used across the application."""

# =============================================================================
# Model Constants - SINGLE SOURCE OF TRUTH
# =============================================================================
# Update these when new model versions are released.

# Gemini text models
GEMINI_FLASH = "gemini-3-flash-preview"
GEMINI_PRO = "gemini-3.1-pro-preview"

# Gemini image models
GEMINI_IMAGE_FREE = "gemini-2.5-flash-image"
GEMINI_IMAGE_PAID = "gemini-3-pro-image-preview"

# Chat-completion defaults
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_OPENROUTER_MODEL = "anthropic/claude-3-opus"

# Local model server default
DEFAULT_OLLAMA_MODEL = "llama3"

# =============================================================================
# Endpoints
# =============================================================================

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_API_BASE = "https://api.openai.com/v1"
OPENROUTER_API_BASE = "https://openrouter.ai/api/v1"

# Prefix Gemini puts on every model name in its listing
GEMINI_MODEL_PREFIX = "models/"

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_PROVIDER = "gemini"
DEFAULT_USER_ID = "default-user"
DEFAULT_ANALYZE_PROMPT = "Analyze this image."

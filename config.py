"""
Configuration and constants for the TramPLAR fallback chat service.

Values are read once at import time. Provider credentials, the provider
order and the per-attempt timeout are resolved into an immutable
``DispatcherConfig`` by ``providers.configuration.load_dispatcher_config``.
"""

from utils.env import get_env, get_env_int

__version__ = "1.0.0"

# Order matters: the first provider listed is tried first
DEFAULT_PROVIDER_ORDER = ("openai", "anthropic", "gemini", "mistral", "groq")

# Per provider attempt, in milliseconds
DEFAULT_TIMEOUT_MS = 25000

FALLBACK_MESSAGE = get_env("FALLBACK_MESSAGE") or "No provider could answer. Please try again later."

PORT = get_env_int("PORT", 3000)
HOST = get_env("HOST", "0.0.0.0") or "0.0.0.0"

LOG_LEVEL = (get_env("LOG_LEVEL", "INFO") or "INFO").upper()

# Inbound JSON bodies larger than this are rejected with 413
MAX_BODY_BYTES = 1024 * 1024

CORS_ALLOW_ORIGINS = [
    origin.strip() for origin in (get_env("CORS_ALLOW_ORIGINS", "*") or "*").split(",") if origin.strip()
]

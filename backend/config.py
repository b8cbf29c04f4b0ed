import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    # Remote inference (Hugging Face Inference API)
    hf_api_key: str = ""
    hf_api_url: str = "https://api-inference.huggingface.co/models"
    hf_classifier_model: str = "facebook/bart-large-mnli"
    hf_generator_model: str = "mistralai/Mixtral-8x7B-Instruct-v0.1"

    # Improved resume generation
    generation_backend: str = "huggingface"  # "huggingface" | "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    generate_improved_resume: bool = True

    # Resilience
    remote_timeout_seconds: float = 5.0
    remote_max_attempts: int = 3
    remote_backoff_seconds: float = 1.0  # linear: backoff * attempt
    circuit_breaker_threshold: int = 5
    circuit_breaker_reset_seconds: float = 60.0
    classifier_max_chars: int = 4000

    # Sessions
    session_cookie_name: str = "session_id"
    session_cookie_secure: bool = False
    session_ttl_hours: int = 24

    # HTTP
    rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})

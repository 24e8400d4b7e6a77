from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Hybrid selection settings loaded from environment variables.

    There is no module-level instance: construct one and pass it to the
    components that need it (HybridSelector, IntelligentCache, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Cascade thresholds
    cache_similarity_threshold: float = 0.85
    fingerprint_confidence_threshold: float = 0.8
    # Results at or above this confidence are written back to the cache
    cache_write_confidence_threshold: float = 0.75

    # Selection limits
    max_files_per_evaluation: int = 25

    # Cache store
    cache_ttl_hours: int = 24
    max_cache_entries: int = 1000

    # AI / Anthropic
    anthropic_api_key: str = ""
    file_selection_model: str = "claude-3-5-haiku-20241022"
    file_selection_max_tokens: int = 2000
    file_selection_temperature: float = 0.1
    ai_selection_timeout_ms: int = 5000
    ai_max_candidate_files: int = 200  # Candidate paths shown to the model
    # Deterministic course-aware selection instead of a model call (local dev, demos)
    ai_mock_mode: bool = False

    # Content fetch
    content_fetch_concurrency: int = 5

    # Feature flags
    enable_intelligent_caching: bool = True
    enable_ai_guided_selection: bool = True
    enable_ai_validation: bool = False
    enable_cache_warming: bool = False

    @property
    def cache_ttl_seconds(self) -> int:
        """Cache time-to-live in seconds."""
        return self.cache_ttl_hours * 3600

    @property
    def ai_selection_timeout_seconds(self) -> float:
        """Model call timeout in seconds."""
        return self.ai_selection_timeout_ms / 1000

    @property
    def ai_available(self) -> bool:
        """Check if a real model can be called (has API key and not mocked)."""
        return bool(self.anthropic_api_key) and not self.ai_mock_mode

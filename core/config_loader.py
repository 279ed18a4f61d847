import yaml
import os
from typing import Optional
from pydantic import BaseModel, Field

from core.scorer.models import ScoreWeights


class DatabaseConfig(BaseModel):
    url: str
    pool_size: int = 10
    max_overflow: int = 20


class SearchConfig(BaseModel):
    """Typesense connection used by the candidate source adapter."""
    url: str = "http://localhost:8108"
    api_key: Optional[str] = None
    organisations_collection: str = "organisations_search"
    workers_collection: str = "workers_search"
    max_candidates: int = 50
    request_timeout_seconds: int = 10


class ScorerConfig(BaseModel):
    """
    Configuration for the ScoringService.

    score = (base_match * w_base + preference_alignment * w_pref
             + reliability * w_rel + urgency_bonus * w_urg
             + emotional_comfort * w_emo) / sum(w) * 100
    """
    weight_base_match: float = Field(default=1.0, ge=0)
    weight_preference_alignment: float = Field(default=0.4, ge=0)
    weight_reliability: float = Field(default=0.3, ge=0)
    weight_urgency_bonus: float = Field(default=0.2, ge=0)
    weight_emotional_comfort: float = Field(default=0.1, ge=0)

    def weights(self) -> ScoreWeights:
        return ScoreWeights(
            base_match=self.weight_base_match,
            preference_alignment=self.weight_preference_alignment,
            reliability=self.weight_reliability,
            urgency_bonus=self.weight_urgency_bonus,
            emotional_comfort=self.weight_emotional_comfort,
        )


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    # Organisations taken from the search result for verification
    top_n: int = Field(default=20, ge=1)
    default_max_distance_km: float = Field(default=25.0, gt=0, le=500)

    # Thread pool size for the verification fan-out
    verification_workers: int = Field(default=16, ge=1)

    scorer: ScorerConfig = Field(default_factory=ScorerConfig)


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(BaseModel):
    database: DatabaseConfig
    search: SearchConfig = Field(default_factory=SearchConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var overrides for the search engine
    env_search_url = os.environ.get("TYPESENSE_URL")
    if env_search_url:
        if not data.get('search'):
            data['search'] = {}
        data['search']['url'] = env_search_url

    env_search_key = os.environ.get("TYPESENSE_API_KEY")
    if env_search_key:
        if not data.get('search'):
            data['search'] = {}
        data['search']['api_key'] = env_search_key

    return AppConfig(**data)

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "MarketMatch"
    debug: bool = False

    database_url: str = "sqlite:///./marketmatch.db"

    match_auto_link_threshold: float = 0.8
    match_suggest_threshold: float = 0.7
    match_candidate_limit: int = 20
    match_ambiguity_delta: float = 0.01
    match_brand_weight: float = 0.2
    match_overlap_weight: float = 0.3
    match_name_weight: float = 0.5

    suggestion_min_query_length: int = 3
    suggestion_limit: int = 5

    catalog_create_retries: int = 2

    auto_approve_products: bool = False
    require_product_moderation: bool = False

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False


settings = Settings()

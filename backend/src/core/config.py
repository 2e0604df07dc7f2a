from urllib.parse import urlparse

from pydantic_settings import BaseSettings

from src.integrations.nivoda.adapters import SCHEMA_ADAPTERS


class Settings(BaseSettings):
    # Nivoda (diamond supplier)
    nivoda_endpoint: str = "https://intg-customer-staging.nivodaapi.net/api/diamonds"
    nivoda_username: str = ""
    nivoda_password: str = ""
    nivoda_schema: str = "v4"
    nivoda_token_ttl_seconds: float = 5.5 * 60 * 60
    nivoda_request_total_count: bool = False

    # Shopify Admin API
    shopify_store_domain: str = ""
    shopify_admin_token: str = ""
    shopify_api_version: str = "2024-10"
    # Product whose variants represent individual diamonds
    shopify_diamond_product_id: str = ""

    # Storefront origin for the degraded cart link ("" keeps it relative)
    storefront_url: str = ""

    # CORS
    cors_allowed_origins: str = "*"

    # App
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    @property
    def nivoda_configured(self) -> bool:
        return bool(self.nivoda_username and self.nivoda_password)

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shopify_store_domain and self.shopify_admin_token)

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "extra": "ignore"}

    def validate_config(self) -> None:
        """Raise if the configuration cannot produce a working proxy."""
        if self.nivoda_schema not in SCHEMA_ADAPTERS:
            known = ", ".join(sorted(SCHEMA_ADAPTERS))
            raise ValueError(f"nivoda_schema must be one of: {known}")
        parsed = urlparse(self.nivoda_endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("nivoda_endpoint must be a valid http(s) URL")
        if self.nivoda_token_ttl_seconds <= 0:
            raise ValueError("nivoda_token_ttl_seconds must be positive")
        if self.storefront_url:
            parsed = urlparse(self.storefront_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError("storefront_url must be a valid http(s) URL")


settings = Settings()

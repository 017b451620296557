from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    blueprint_api_key: str | None = None
    log_level: str = "INFO"

    # Report defaults (passed into the renderer explicitly; the core never reads settings)
    default_language: str = "en"  # "en" | "hi"
    report_margin_mm: float = 15.0
    report_brand: str = "Genewell Wellness"

    # Pricing display
    currency: str = "INR"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

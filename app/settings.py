from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    debug: bool = False
    app_name: str = "Spacetraveling"
    prismic_api_endpoint: str
    prismic_access_token: str | None = None
    posts_document_type: str = "posts"
    posts_page_size: int = Field(default=1, ge=1, le=100)
    static_paths_page_size: int = Field(default=1, ge=1, le=100)
    list_revalidate_seconds: int = 60
    post_revalidate_seconds: int = 60 * 5
    default_timezone: str = "UTC"
    date_locale: str = "pt_br"
    http_timeout: float = 10.0

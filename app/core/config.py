from __future__ import annotations

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class Settings(BaseSettings):
    """
    - extra="ignore" lets the container pass POSTGRES_* and other variables
      we do not read directly without failing startup
    - DATABASE_URL wins; otherwise the URL is assembled from DB_* parts
    - config.yaml (flat keys named like the variables, e.g. `SERVER_PORT: 8080`)
      is read when present;
      environment variables and .env override it
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        yaml_file="config.yaml",
        yaml_file_encoding="utf-8",
    )

    project_name: str = Field(default="Subscription Service", alias="PROJECT_NAME")
    api_version: str = Field(default="1.0.0", alias="API_VERSION")

    # Server
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=8080, alias="SERVER_PORT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # DB
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(default="postgres", alias="DB_PASSWORD")
    db_name: str = Field(default="subscriptions", alias="DB_NAME")
    db_sslmode: str = Field(default="disable", alias="DB_SSLMODE")

    run_migrations: bool = Field(default=True, alias="RUN_MIGRATIONS")

    # Listing
    default_page_limit: int = Field(default=10, alias="DEFAULT_PAGE_LIMIT")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?sslmode={self.db_sslmode}"
        )


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "streaming-catalog"
    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"

    mongo_port: int = 27017
    mongo_host: str = "localhost"
    mongo_db: str = "streaming_catalog"
    mongo_scheme: str = "mongodb+srv"
    mongo_password: str | None = None
    mongo_params: str | None = None
    mongo_user: str | None = None

    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = "very-secret-key"
    session_token_expires_days: int = 7
    bcrypt_rounds: int = 10
    cookie_name: str = "token"

    redis_db: int = 0
    redis_port: int = 6379
    redis_host: str = "localhost"
    redis_password: str | None = None
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=True)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def mongo_uri(self) -> str:
        auth = ""
        if self.mongo_user and self.mongo_password:
            auth = f"{self.mongo_user}:{self.mongo_password}@"
        host = self.mongo_host
        if self.mongo_scheme == "mongodb":
            host = f"{self.mongo_host}:{self.mongo_port}"
        params = self.mongo_params or "retryWrites=true&w=majority"
        return f"{self.mongo_scheme}://{auth}{host}/{self.mongo_db}?{params}"


settings = Settings()

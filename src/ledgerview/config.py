from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "explorer"
    debug: bool = False
    primary_currency_symbol: str = "cGLD"
    secondary_currency_symbol: str = "cUSD"
    excluded_call_type: str = "delegatecall"  # runs in the caller's context, moves no value of its own

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()

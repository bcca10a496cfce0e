from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for jwtlab.
    Values can be overridden via JWTLAB_* environment variables or a .env file.
    """

    app_name: str = "jwtlab - JWT decode, sign & verify"
    environment: str = "dev"

    # Algorithm the CLI signs with when --alg is omitted
    default_alg: str = "HS256"

    # Default JOSE header typ; header overrides may replace it
    default_typ: str = "JWT"

    log_level: str = "INFO"

    # Indent used when the CLI prints JSON
    json_indent: int = 4

    # Quick expiry choices offered by the CLI (hours from now)
    expiry_presets_hours: List[int] = [1, 24, 168]

    class Config:
        env_prefix = "JWTLAB_"
        env_file = ".env"  # if a .env file exists, it will be read automatically


# create a single settings instance we can import everywhere
settings = Settings()

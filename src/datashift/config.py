from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.datashift.io"


class Settings(BaseSettings):
    # API key, must start with sk_live_ or sk_test_
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL

    # Per-request timeout in seconds
    timeout: float = 30.0

    # Retries for network failures and 5xx responses
    retries: int = 3
    retry_delay: float = 1.0  # base delay, doubled on each retry

    model_config = {
        "env_prefix": "DATASHIFT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

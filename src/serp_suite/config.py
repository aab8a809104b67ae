from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "SERP_"}

    base_url: str = "https://google.com"
    browser_headless: bool = True
    locale: str = "en-US"

    default_timeout: int = 10000
    navigation_timeout: int = 30000

    expected_result_count: int = 10

    math_max_operand: int = 1000
    math_seed: int | None = None
    math_exclude_zero_divisor: bool = True
    close_digits: int = 8


settings = Settings()

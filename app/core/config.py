from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Food_Delivery_Demo"

    # --- Generation (optional, static data is used without a key) ---
    DEEPSEEK_API_KEY: str | None = None
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com"
    LLM_MODEL: str = "deepseek-chat"

    # --- Durable cart slot (RAM fallback when unset or unreachable) ---
    REDIS_URL: str | None = None
    CART_STORAGE_KEY: str = "foodDeliveryCart"

    # --- Order ledger (empty URL = save locally, no network) ---
    GOOGLE_SHEETS_SCRIPT_URL: str = ""
    LEDGER_HTTP_TIMEOUT_SECONDS: float = 30.0
    ORDER_TIMEZONE: str = "Asia/Taipei"

    # --- Checkout ---
    SHIPPING_FEE: int = 30
    SUBMIT_TIMEOUT_SECONDS: float = 15.0
    REJECT_CONCURRENT_SUBMISSIONS: bool = False

    # --- UI ---
    ALERT_TTL_SECONDS: float = 3.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # other variables in .env are not ours
    )

settings = Settings()

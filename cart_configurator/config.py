from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./configurator.db"
    COMPANY_NAME: str = "Custom Cart Works"
    COMPANY_EMAIL: str = "quotes@customcartworks.com"
    CORS_ORIGINS: list[str] = ["*"]

    # Pricing
    LABOR_RATE_DEFAULT: float = 125.00
    # Base cost per material zone. The material multiplier applies to this, not to the platform price
    ZONE_BASE_COSTS: dict[str, float] = {
        "BODY": 800.00,
        "SEATS": 400.00,
        "ROOF": 300.00,
        "METAL": 500.00,
        "GLASS": 200.00,
    }

    # Delivery estimate: base build time plus one week per block of labor hours
    DELIVERY_BASE_WEEKS: int = 4
    DELIVERY_HOURS_PER_WEEK: float = 40.0

    class Config:
        env_file = ".env"


settings = Settings()

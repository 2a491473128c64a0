from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from .configuration import CartConfiguration
from .models import QuoteStatus
from .pricing_engine import PricingBreakdown


class ConfigurationCreate(BaseModel):
    platform_id: str


class BuildNotesUpdate(BaseModel):
    build_notes: str


class ConfigurationSaved(BaseModel):
    success: bool = True
    configuration_id: str


class ConfigurationResult(BaseModel):
    """Body returned by every configuration mutation — the new value plus its price."""
    configuration: CartConfiguration
    pricing: PricingBreakdown
    delivery_weeks: int


class QuoteCreate(BaseModel):
    configuration_id: str
    customer_name: str
    customer_email: str
    customer_phone: str = ""
    message: str = ""
    submitted_at: Optional[datetime] = None


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class Quote(BaseModel):
    id: str
    configuration_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    message: str
    status: QuoteStatus
    submitted_at: datetime
    configuration: Optional[CartConfiguration] = None
    grand_total: Optional[float] = None


class CatalogIssues(BaseModel):
    valid: bool
    issues: List[str] = []

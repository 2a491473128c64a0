from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from typing import List
from datetime import datetime, timezone
import logging

from .. import models, schemas
from ..catalog_loader import configuration_from_row
from ..database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _quote_to_dict(quote: models.Quote) -> dict:
    config_row = quote.configuration
    return {
        "id": quote.id,
        "configuration_id": quote.configuration_id,
        "customer_name": quote.customer_name,
        "customer_email": quote.customer_email,
        "customer_phone": quote.customer_phone or "",
        "message": quote.message or "",
        "status": quote.status,
        "submitted_at": quote.submitted_at,
        "configuration": configuration_from_row(config_row) if config_row else None,
        "grand_total": config_row.grand_total if config_row else None,
    }


def _get_quote(db: Session, quote_id: str) -> models.Quote:
    quote = db.query(models.Quote).options(joinedload(models.Quote.configuration)).filter(
        models.Quote.id == quote_id
    ).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.post("/", response_model=schemas.Quote)
def submit_quote(request: schemas.QuoteCreate, db: Session = Depends(get_db)):
    """Submit a quote request for a saved configuration. Starts PENDING."""
    config = db.query(models.Configuration).filter(
        models.Configuration.id == request.configuration_id
    ).first()
    if not config:
        raise HTTPException(status_code=404, detail="Configuration not found — save it first")

    submitted_at = request.submitted_at or datetime.now(timezone.utc)
    if submitted_at.tzinfo is None:
        submitted_at = submitted_at.replace(tzinfo=timezone.utc)
    quote = models.Quote(
        configuration_id=request.configuration_id,
        customer_name=request.customer_name,
        customer_email=request.customer_email,
        customer_phone=request.customer_phone,
        message=request.message,
        status=models.QuoteStatus.PENDING.value,
        submitted_at=submitted_at.astimezone(timezone.utc).replace(tzinfo=None),
    )
    db.add(quote)
    db.commit()
    logger.info("Quote %s submitted for configuration %s", quote.id, quote.configuration_id)
    return _quote_to_dict(_get_quote(db, quote.id))


@router.get("/", response_model=List[schemas.Quote])
def list_quotes(skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    quotes = db.query(models.Quote).options(joinedload(models.Quote.configuration)).order_by(
        models.Quote.submitted_at.desc()
    ).offset(skip).limit(limit).all()
    return [_quote_to_dict(q) for q in quotes]


@router.get("/{quote_id}", response_model=schemas.Quote)
def get_quote(quote_id: str, db: Session = Depends(get_db)):
    return _quote_to_dict(_get_quote(db, quote_id))


@router.patch("/{quote_id}/status", response_model=schemas.Quote)
def update_quote_status(quote_id: str, update: schemas.QuoteStatusUpdate, db: Session = Depends(get_db)):
    quote = _get_quote(db, quote_id)
    quote.status = update.status.value
    db.commit()
    db.refresh(quote)
    return _quote_to_dict(quote)

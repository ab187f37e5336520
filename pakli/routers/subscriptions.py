# File: pakli/routers/subscriptions.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pakli.core.config import settings
from pakli.core.security import get_current_user
from pakli.db.session import get_db
from pakli.models.subscription import Subscription
from pakli.models.user import User
from pakli.schemas.subscription import SubscriptionIn, SubscriptionOut
from pakli.services.profiles import current_subscription

router = APIRouter(prefix="/subscription", tags=["subscription"])

ALREADY_SUBSCRIBED = "Вече имате активен абонамент"


@router.get("", response_model=Optional[SubscriptionOut])
def get_subscription(user=Depends(get_current_user)):
    return current_subscription(user)


@router.post("", response_model=SubscriptionOut, status_code=201)
def subscribe(body: SubscriptionIn, user=Depends(get_current_user), db: Session = Depends(get_db)):
    """Record a paid notification subscription. Payment itself is simulated."""
    # serialize concurrent subscribes for the same user (no-op on sqlite)
    db.query(User).filter(User.id == user.id).with_for_update().one()
    now = datetime.now(timezone.utc)
    active = db.query(Subscription).filter(Subscription.user_id == user.id, Subscription.active.is_(True)).all()
    for existing in active:
        if existing.is_current(now):
            raise HTTPException(status_code=400, detail=ALREADY_SUBSCRIBED)
        existing.active = False
    db.flush()
    sub = Subscription(
        user_id=user.id,
        active=True,
        payment_method=body.payment_method,
        amount=settings.subscription_price,
        currency=settings.subscription_currency,
        start_date=now,
        expires_at=now + timedelta(days=settings.subscription_days),
    )
    db.add(sub)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=ALREADY_SUBSCRIBED)
    db.refresh(sub)
    logging.info(f"Subscription {sub.id} created for user {user.id} via {body.payment_method}")
    return sub


@router.delete("")
def cancel_subscription(user=Depends(get_current_user), db: Session = Depends(get_db)):
    sub = current_subscription(user)
    if sub is None:
        return {"ok": True}
    sub.active = False
    db.commit()
    return {"ok": True}

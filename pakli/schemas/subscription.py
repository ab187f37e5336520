from datetime import datetime
from typing import Literal

from pakli.schemas.outage import CamelModel

PaymentMethod = Literal["epay", "stripe"]


class SubscriptionIn(CamelModel):
    payment_method: PaymentMethod


class SubscriptionOut(CamelModel):
    active: bool
    expires_at: datetime
    payment_method: str
    amount: float
    currency: str
    start_date: datetime

    model_config = {"from_attributes": True}

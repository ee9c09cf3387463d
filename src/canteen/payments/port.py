"""Payment-reference generator port.

A generator turns ``(order_id, amount)`` into an artifact the customer uses to
pay out of band, typically a QR payload. Nothing about it is persisted.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class PaymentReference:
    order_id: str
    amount: float
    reference: str
    payload: str
    format: str = "qr"

    def as_dict(self) -> dict:
        return asdict(self)


class PaymentReferenceGenerator(ABC):
    @abstractmethod
    def generate(self, order_id: str, amount: float) -> PaymentReference:
        """Build the payment artifact for an order. Must not have side effects."""
        ...

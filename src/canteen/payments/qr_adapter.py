"""QR payment payload generator.

Produces a payment URI the frontend renders as a QR code. The payee comes
from ``PAYMENT_PAYEE``.
"""

import os
from urllib.parse import urlencode

from canteen.payments.port import PaymentReference, PaymentReferenceGenerator

DEFAULT_PAYEE = "canteen@pay"


class QRPaymentReferenceGenerator(PaymentReferenceGenerator):
    def __init__(self, payee: str | None = None, currency: str = "INR"):
        self.payee = payee or os.environ.get("PAYMENT_PAYEE", DEFAULT_PAYEE)
        self.currency = currency

    def generate(self, order_id: str, amount: float) -> PaymentReference:
        reference = f"ORD-{order_id}"
        query = urlencode(
            {
                "pa": self.payee,
                "am": f"{amount:.2f}",
                "cu": self.currency,
                "tr": reference,
                "tn": f"Canteen order {order_id}",
            }
        )
        return PaymentReference(
            order_id=str(order_id),
            amount=amount,
            reference=reference,
            payload=f"upi://pay?{query}",
        )

"""Fake payment-reference generator that records requests for testing."""

from canteen.payments.port import PaymentReference, PaymentReferenceGenerator


class FakePaymentReferenceGenerator(PaymentReferenceGenerator):
    def __init__(self):
        self.requests: list[tuple[str, float]] = []
        self.should_succeed = True

    def configure(self, should_succeed: bool = True):
        self.should_succeed = should_succeed

    def generate(self, order_id: str, amount: float) -> PaymentReference:
        if not self.should_succeed:
            raise RuntimeError("Payment reference generation failed")
        self.requests.append((str(order_id), amount))
        return PaymentReference(
            order_id=str(order_id),
            amount=amount,
            reference=f"fake-{order_id}",
            payload=f"fake://pay/{order_id}/{amount:.2f}",
        )

    def reset(self):
        self.requests.clear()
        self.should_succeed = True

"""Payment-reference generator factory.

``PAYMENT_REFERENCE_GENERATOR`` picks the adapter: ``qr`` (default) or
``fake``.
"""

import os

from canteen.payments.port import PaymentReferenceGenerator

_current_generator: PaymentReferenceGenerator | None = None


def get_generator() -> PaymentReferenceGenerator:
    global _current_generator
    if _current_generator is None:
        adapter = os.environ.get("PAYMENT_REFERENCE_GENERATOR", "qr")
        if adapter == "qr":
            from canteen.payments.qr_adapter import QRPaymentReferenceGenerator

            _current_generator = QRPaymentReferenceGenerator()
        elif adapter == "fake":
            from canteen.payments.fake_adapter import FakePaymentReferenceGenerator

            _current_generator = FakePaymentReferenceGenerator()
        else:
            raise ValueError(f"Unknown payment reference generator: {adapter}")
    return _current_generator


def set_generator(generator: PaymentReferenceGenerator) -> None:
    global _current_generator
    _current_generator = generator


def reset_generator() -> None:
    global _current_generator
    _current_generator = None

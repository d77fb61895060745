"""Payment module selection by configured name."""

from payaudit.common.config import settings
from payaudit.services.modules.simulated import SimulatedPaymentModule


def get_payment_module(name: str | None = None):
    name = (name or settings.payment_module or "simulated").lower()
    # register real gateway modules alongside the simulated one
    if name == "simulated":
        return SimulatedPaymentModule(
            decline_weight=settings.simulated_decline_weight,
            timeout_weight=settings.simulated_timeout_weight,
        )
    raise RuntimeError(f"Unknown PAYMENT_MODULE: {name}")

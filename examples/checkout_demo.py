"""
Checkout — full flow against in-memory backends.

  1. Happy path without signature: 1 → 2 → 4 → 5
  2. Signature required:            1 → 2 → 3 → 4 → 5
  3. Card declined, then paid but the order service is down → 99
"""

from kungfu import Ok, Error

from checkout_flow import configure_logging
from checkout_flow.account import AccountConfigLoader
from checkout_flow.cart import CustomerInfo
from checkout_flow.flow import FlowView
from checkout_flow.payment import PaymentOrchestrator
from checkout_flow.registry import CheckoutOptions, CheckoutRegistry, CheckoutServices
from examples._infra import (
    FakeIntents,
    FakeNotifier,
    FakeOrders,
    FakeProcessor,
    MemoryConfigSource,
    banner,
    run,
)

CUSTOMER = CustomerInfo.capture(
    email=" ana@example.com ",
    full_name="Ana López",
    address_line="Av. Reforma 100",
    city="CDMX",
    postal_code="06600",
)


def show(view: FlowView) -> None:
    badges = " ".join(f"[{b.label}:{b.title}]" if b.status.value == "active" else b.label for b in view.stepper)
    print(f"  {badges}  total {view.total}" + (f"  ! {view.error}" if view.error else ""))


async def main() -> None:
    configure_logging("WARNING")

    source = MemoryConfigSource()
    source.templates["signed"] = {"name": "Rental", "config": {"general": {"requires_signature": True}}}
    source.defaults["signed"] = source.defaults["acme"]
    source.storefronts["signed"] = source.storefronts["acme"]

    processor = FakeProcessor()
    orders = FakeOrders()
    orchestrator = PaymentOrchestrator(FakeIntents(), processor, orders, FakeNotifier())
    services = CheckoutServices(loader=AccountConfigLoader(source), orchestrator=orchestrator)
    registry = CheckoutRegistry()

    banner("1. No signature")
    match await registry.init(CheckoutOptions("acme", container_id="shop"), services, render=show):
        case Ok(machine):
            pass
        case Error(e):
            print(f"init failed: {e.reason}")
            return
    registry.open("shop")
    registry.update_quantity(1, 0, "shop")
    machine.continue_from_cart()
    machine.submit_customer_info(CUSTOMER)
    match await machine.pay(card_element="card"):
        case Ok(committed):
            codes = machine.view().codes
            print(f"  ✓ order {committed.order_reference}, ref {committed.transaction_ref}")
            print(f"  QR: {codes.qr_text!r}" if codes else "")

    banner("2. Signature required")
    match await registry.init(CheckoutOptions("signed", container_id="rental"), services, render=show):
        case Ok(machine):
            pass
        case Error(e):
            print(f"init failed: {e.reason}")
            return
    registry.open("rental")
    machine.continue_from_cart()
    machine.submit_customer_info(CUSTOMER)
    machine.signature_pad.pen_down(10, 10)
    machine.signature_pad.pen_move(80, 40)
    machine.signature_pad.pen_up()
    machine.confirm_signature(accepted_terms=True)
    await machine.pay(card_element="card")
    print(f"  signature stored: {orders.committed[-1].signature_image is not None}")

    banner("3. Declined, then paid but not recorded")
    match await registry.init(CheckoutOptions("acme", container_id="kiosk"), services, render=show):
        case Ok(machine):
            pass
        case Error(e):
            print(f"init failed: {e.reason}")
            return
    registry.open("kiosk")
    machine.continue_from_cart()
    machine.submit_customer_info(CUSTOMER)
    processor.decline = True
    await machine.pay(card_element="card")
    processor.decline = False
    orders.down = True
    match await machine.pay(card_element="card"):
        case Error(e):
            print(f"  ✗ {e.reason}: quote {machine.view().transaction_ref} to support")

    await orchestrator.drain()


if __name__ == "__main__":
    run(main)

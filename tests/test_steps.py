import pytest

from checkout_flow import steps as St
from checkout_flow.steps import Step, StepStatus


@pytest.mark.parametrize(
    ("step", "with_signature", "without_signature"),
    [
        (Step.CART, "1", "1"),
        (Step.CUSTOMER_INFO, "2", "2"),
        (Step.PAYMENT, "4", "3"),
        (Step.CONFIRMATION, "5", "4"),
    ],
)
def test_display_label(step: Step, with_signature: str, without_signature: str) -> None:
    assert St.display_label(step, signature_required=True) == with_signature
    assert St.display_label(step, signature_required=False) == without_signature


def test_signature_label_only_exists_with_signature() -> None:
    assert St.display_label(Step.SIGNATURE, signature_required=True) == "3"
    with pytest.raises(ValueError):
        St.display_label(Step.SIGNATURE, signature_required=False)


def test_failed_state_is_shown_as_payment() -> None:
    assert St.display_label(Step.PAYMENT_SUCCEEDED_ORDER_FAILED, signature_required=False) == "3"
    badges = St.stepper(Step.PAYMENT_SUCCEEDED_ORDER_FAILED, signature_required=False)
    assert [b.status for b in badges] == [
        StepStatus.COMPLETED,
        StepStatus.COMPLETED,
        StepStatus.ACTIVE,
        StepStatus.PENDING,
    ]


def test_stepper_without_signature() -> None:
    badges = St.stepper(Step.PAYMENT, signature_required=False)
    assert [(b.label, b.title) for b in badges] == [
        ("1", "Cart"),
        ("2", "Info"),
        ("3", "Payment"),
        ("4", "Confirm"),
    ]
    assert badges[2].status is StepStatus.ACTIVE


def test_signature_unreachable_without_signature() -> None:
    assert Step.SIGNATURE not in St.visible_steps(False)
    assert St.after_customer_info(False) is Step.PAYMENT
    assert St.back_target(Step.PAYMENT, False) is Step.CUSTOMER_INFO
    for step in Step:
        assert not St.can_go_back_to(step, Step.SIGNATURE, False)


def test_transitions_with_signature() -> None:
    assert St.after_customer_info(True) is Step.SIGNATURE
    assert St.back_target(Step.PAYMENT, True) is Step.SIGNATURE
    assert St.back_target(Step.SIGNATURE, True) is Step.CUSTOMER_INFO
    assert St.back_target(Step.CUSTOMER_INFO, True) is Step.CART
    assert St.back_target(Step.CART, True) is None


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        (Step.SIGNATURE, Step.CART, True),
        (Step.PAYMENT, Step.CUSTOMER_INFO, True),
        (Step.PAYMENT, Step.CART, False),
        (Step.CART, Step.CUSTOMER_INFO, False),
        (Step.CONFIRMATION, Step.PAYMENT, False),
        (Step.PAYMENT_SUCCEEDED_ORDER_FAILED, Step.PAYMENT, False),
        (Step.PAYMENT, Step.PAYMENT_SUCCEEDED_ORDER_FAILED, False),
    ],
)
def test_can_go_back_to(current: Step, target: Step, allowed: bool) -> None:
    assert St.can_go_back_to(current, target, signature_required=True) is allowed

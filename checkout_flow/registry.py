"""
Registry — every checkout embedded in this process, by key.

    from checkout_flow.registry import registry, CheckoutOptions

    match await registry.init(CheckoutOptions("acme", container_id="shop"), services):
        case Ok(machine): ...

    registry.open("shop")
    registry.update_quantity(0, 3)          # no key → most recently created

Keys resolve in order: container id, config id, instance id. When several
instances share a container or config id the most recent one wins.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog
from kungfu import Result, Ok, Error

from checkout_flow._types import InstanceKey, RenderHook
from checkout_flow.account import AccountConfigLoader, CatalogProduct
from checkout_flow.config import Settings
from checkout_flow.errors import ConfigError, NavigationError, UnknownInstance
from checkout_flow.flow import FlowInstance, FlowView, StepMachine
from checkout_flow.payment import PaymentOrchestrator
from checkout_flow.steps import Step

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CheckoutServices:
    loader: AccountConfigLoader
    orchestrator: PaymentOrchestrator
    settings: Settings = field(default_factory=Settings)


@dataclass(frozen=True, slots=True)
class CheckoutOptions:
    account_id: str
    container_id: str | None = None
    config_id: str | None = None
    products: tuple[CatalogProduct, ...] | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Host commands
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Show:
    key: InstanceKey | None = None


@dataclass(frozen=True, slots=True)
class Open:
    key: InstanceKey | None = None


@dataclass(frozen=True, slots=True)
class Close:
    key: InstanceKey | None = None


@dataclass(frozen=True, slots=True)
class UpdateQuantity:
    line_index: int
    quantity: int
    key: InstanceKey | None = None


@dataclass(frozen=True, slots=True)
class GoToStep:
    step: Step
    key: InstanceKey | None = None


type Command = Show | Open | Close | UpdateQuantity | GoToStep
type ControlError = NavigationError | UnknownInstance


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutRegistry:
    def __init__(self) -> None:
        self._machines: dict[str, StepMachine] = {}

    def __len__(self) -> int:
        return len(self._machines)

    def __iter__(self) -> Iterator[StepMachine]:
        return iter(list(self._machines.values()))

    async def init(
        self,
        options: CheckoutOptions,
        services: CheckoutServices,
        render: RenderHook[FlowView] | None = None,
    ) -> Result[StepMachine, ConfigError]:
        """Load account configuration, then register a closed instance at the cart."""
        loaded = await services.loader.load(options.account_id, options.config_id, options.products)
        match loaded:
            case Ok(account):
                pass
            case Error(e):
                log.warning("checkout_init_failed", account_id=options.account_id, reason=e.reason)
                return Error(e)

        settings = services.settings
        instance = FlowInstance.create(
            account,
            container_id=options.container_id,
            signature_size=(settings.signature_width, settings.signature_height),
        )
        machine = StepMachine(
            instance,
            services.orchestrator,
            render=render,
            currency=settings.currency,
            nominal_rate_percent=settings.nominal_tax_rate_percent,
        )
        return Ok(self.add(machine))

    def add(self, machine: StepMachine) -> StepMachine:
        instance = machine.instance
        self._machines[instance.instance_id] = machine
        log.info(
            "checkout_registered",
            instance_id=instance.instance_id,
            container_id=instance.container_id,
            config_id=instance.config_id,
            signature_required=instance.signature_required,
        )
        return machine

    def resolve(self, key: InstanceKey | None = None) -> Result[StepMachine, UnknownInstance]:
        machines = list(self._machines.values())
        if not machines:
            return Error(UnknownInstance("No checkout has been initialised"))
        if key is None:
            return Ok(machines[-1])

        newest_first = machines[::-1]
        for machine in newest_first:
            if machine.instance.container_id == key:
                return Ok(machine)
        for machine in newest_first:
            if machine.instance.config_id == key:
                return Ok(machine)
        if key in self._machines:
            return Ok(self._machines[key])
        return Error(UnknownInstance(f"No checkout found for {key!r}"))

    def destroy(self, key: InstanceKey | None = None) -> bool:
        match self.resolve(key):
            case Ok(machine):
                machine.close()
                del self._machines[machine.instance.instance_id]
                log.info("checkout_destroyed", instance_id=machine.instance.instance_id)
                return True
            case Error(_):
                return False

    def clear(self) -> None:
        self._machines.clear()

    # ── host control surface ─────────────────────────────────────────────────

    def dispatch(self, command: Command) -> Result[FlowView, ControlError]:
        match self.resolve(command.key):
            case Ok(machine):
                pass
            case Error(e):
                log.info("checkout_command_unresolved", command=type(command).__name__, key=command.key)
                return Error(e)

        match command:
            case Show():
                return Ok(machine.view())
            case Open():
                return Ok(machine.open())
            case Close():
                return Ok(machine.close())
            case UpdateQuantity(line_index, quantity):
                result = machine.update_quantity(line_index, quantity)
            case GoToStep(step):
                result = machine.go_to_step(step)

        match result:
            case Ok(_):
                return Ok(machine.view())
            case Error(e):
                return Error(e)

    def open(self, key: InstanceKey | None = None) -> Result[FlowView, ControlError]:
        return self.dispatch(Open(key))

    def close(self, key: InstanceKey | None = None) -> Result[FlowView, ControlError]:
        return self.dispatch(Close(key))

    def update_quantity(
        self, line_index: int, quantity: int, key: InstanceKey | None = None
    ) -> Result[FlowView, ControlError]:
        return self.dispatch(UpdateQuantity(line_index, quantity, key))

    def go_to_step(self, step: Step, key: InstanceKey | None = None) -> Result[FlowView, ControlError]:
        return self.dispatch(GoToStep(step, key))


registry = CheckoutRegistry()


__all__ = (
    "CheckoutServices",
    "CheckoutOptions",
    "Show",
    "Open",
    "Close",
    "UpdateQuantity",
    "GoToStep",
    "Command",
    "ControlError",
    "CheckoutRegistry",
    "registry",
)

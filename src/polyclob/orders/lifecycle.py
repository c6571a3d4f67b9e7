"""Order Lifecycle — состояния одного ордера на стороне клиента.

DRAFTING → AMOUNTS_COMPUTED → SIGNED → (POSTED | CANCELLED)

- SIGNED → SIGNED: повторная отправка того же подписанного ордера без переподписи
- POSTED → CANCELLED: отмена размещённого ордера
- CANCELLED: терминальное состояние
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet

from polyclob.core.errors import InvalidOrderTransition


class OrderState(str, Enum):
    """Состояние ордера."""
    DRAFTING = "DRAFTING"
    AMOUNTS_COMPUTED = "AMOUNTS_COMPUTED"
    SIGNED = "SIGNED"
    POSTED = "POSTED"
    CANCELLED = "CANCELLED"


_ALLOWED_TRANSITIONS: Dict[OrderState, FrozenSet[OrderState]] = {
    OrderState.DRAFTING: frozenset({OrderState.AMOUNTS_COMPUTED}),
    OrderState.AMOUNTS_COMPUTED: frozenset({OrderState.SIGNED}),
    OrderState.SIGNED: frozenset({OrderState.SIGNED, OrderState.POSTED, OrderState.CANCELLED}),
    OrderState.POSTED: frozenset({OrderState.CANCELLED}),
    OrderState.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class LifecycleTransitionResult:
    """Результат перехода состояния ордера."""

    new_state: OrderState
    previous_state: OrderState
    transition_occurred: bool
    transition_reason: str


class OrderLifecycle:
    """State machine жизненного цикла ордера.

    Не хранит состояние: текущее состояние передаётся вызывающим кодом,
    результат описывает новое состояние.
    """

    def allowed_targets(self, current_state: OrderState) -> FrozenSet[OrderState]:
        """Допустимые целевые состояния из current_state."""
        return _ALLOWED_TRANSITIONS[current_state]

    def is_terminal(self, state: OrderState) -> bool:
        return not _ALLOWED_TRANSITIONS[state]

    def evaluate_transition(
        self,
        current_state: OrderState,
        target_state: OrderState,
    ) -> LifecycleTransitionResult:
        """Оценка перехода current_state → target_state.

        Raises:
            InvalidOrderTransition: Если переход не разрешён
        """
        if target_state not in _ALLOWED_TRANSITIONS[current_state]:
            raise InvalidOrderTransition(
                f"order cannot move from {current_state.value} to {target_state.value}"
            )

        if target_state == current_state:
            return LifecycleTransitionResult(
                new_state=current_state,
                previous_state=current_state,
                transition_occurred=False,
                transition_reason=f"repeat_{current_state.value}",
            )

        return LifecycleTransitionResult(
            new_state=target_state,
            previous_state=current_state,
            transition_occurred=True,
            transition_reason=f"{current_state.value}_to_{target_state.value}",
        )

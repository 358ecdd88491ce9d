"""Base classes for action handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from app.adapters.catalog import CatalogQueryFacade
from app.core.values import optional_str, to_float
from app.schemas.intent import DispatchResult


@dataclass
class ActionContext:
    """Everything one handler invocation may read."""

    code: int
    channel_id: str
    catalog: CatalogQueryFacade
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def phone_number(self) -> str:
        return optional_str(self.params.get("phone_number")) or self.channel_id

    def has_location(self) -> bool:
        return (
            self.params.get("latitude") is not None
            and self.params.get("longitude") is not None
        )

    def coordinates(self) -> tuple[float, float]:
        """Raises ``InvalidArgumentError`` when a coordinate cannot be coerced."""
        return to_float(self.params["latitude"]), to_float(self.params["longitude"])

    def text_param(self, name: str) -> Optional[str]:
        return optional_str(self.params.get(name))


class ActionHandler(ABC):
    """
    Executes one or more action codes against the catalog.

    ``error_message`` replaces the handler's reply when it raises; "no data"
    outcomes are regular results, not errors.
    """

    codes: tuple[int, ...] = ()
    error_message: str = "Desculpe, ocorreu um erro ao processar sua solicitação. Tente novamente."
    error_wait_for_response: bool = True

    @abstractmethod
    async def handle(self, context: ActionContext) -> DispatchResult:
        ...

    def error_result(self) -> DispatchResult:
        return DispatchResult(
            message=self.error_message,
            wait_for_response=self.error_wait_for_response,
        )


class CannedReplyHandler(ActionHandler):
    """Fixed reply, no catalog query."""

    message: str = ""
    wait_for_response: bool = False

    async def handle(self, context: ActionContext) -> DispatchResult:
        return DispatchResult(message=self.message, wait_for_response=self.wait_for_response)

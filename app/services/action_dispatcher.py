"""Runs the action codes of one turn and merges their replies."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from app.adapters.catalog import CatalogQueryFacade
from app.core.action_codes import NEEDS_REPLY_CODES
from app.infra.logging_config import get_logger
from app.schemas.intent import DispatchResult
from app.schemas.whatsapp import WhatsAppResponse
from app.services.action_handlers import DEFAULT_HANDLERS, ActionContext, ActionHandler

logger = get_logger(__name__)

MESSAGE_SEPARATOR = "\n\n"


class UnknownActionHandler(ActionHandler):
    async def handle(self, context: ActionContext) -> DispatchResult:
        return DispatchResult(
            message="Ação não reconhecida. Por favor, tente novamente.",
            wait_for_response=True,
        )


class HandlerRegistry:
    def __init__(self, handlers: Optional[Iterable[ActionHandler]] = None) -> None:
        self._handlers: dict[int, ActionHandler] = {}
        for handler in handlers or ():
            self.register(handler)

    def register(self, handler: ActionHandler) -> None:
        if not handler.codes:
            raise ValueError(f"{type(handler).__name__} declares no action codes")
        for code in handler.codes:
            if int(code) in self._handlers:
                raise ValueError(f"Action handler already registered for code: {code}")
        for code in handler.codes:
            self._handlers[int(code)] = handler

    def get(self, code: int) -> Optional[ActionHandler]:
        return self._handlers.get(code)

    def codes(self) -> list[int]:
        return sorted(self._handlers)

    def __contains__(self, code: int) -> bool:
        return code in self._handlers


def build_default_registry() -> HandlerRegistry:
    return HandlerRegistry(handler_class() for handler_class in DEFAULT_HANDLERS)


class ActionDispatcher:
    def __init__(
        self,
        catalog: CatalogQueryFacade,
        registry: Optional[HandlerRegistry] = None,
    ) -> None:
        self._catalog = catalog
        self._registry = registry or build_default_registry()
        self._default_handler = UnknownActionHandler()

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def dispatch(
        self,
        codes: list[int],
        params: Optional[dict[str, Any]],
        channel_id: str,
    ) -> WhatsAppResponse:
        """
        Run ``codes`` in order and merge the results.

        Args:
            codes: Action codes in execution order.
            params: Parameters shared by every handler of this turn.
            channel_id: Phone number of the customer.

        Returns:
            WhatsAppResponse: Non-empty messages joined by a blank line, side
            data merged with later keys winning, and ``wait_for_response`` set
            when any executed code needs an answer from the user.
        """
        params = dict(params or {})
        messages: list[str] = []
        data: dict[str, Any] = {}
        wait_for_response = False

        for code in codes:
            handler = self._registry.get(code)
            if handler is None:
                logger.warning("No handler for action code %s (channel %s)", code, channel_id)
                handler = self._default_handler
                wait_for_response = True
            elif code in NEEDS_REPLY_CODES:
                wait_for_response = True

            result = await self._run_handler(handler, code, params, channel_id)
            if result.message:
                messages.append(result.message)
            if result.side_data:
                data.update(result.side_data)

        return WhatsAppResponse(
            message=MESSAGE_SEPARATOR.join(messages),
            wait_for_response=wait_for_response,
            data=data,
            codes=list(codes),
        )

    async def _run_handler(
        self,
        handler: ActionHandler,
        code: int,
        params: dict[str, Any],
        channel_id: str,
    ) -> DispatchResult:
        context = ActionContext(
            code=code, channel_id=channel_id, catalog=self._catalog, params=params
        )
        try:
            return await handler.handle(context)
        except Exception:
            logger.exception(
                "Action handler %s failed for code %s (channel %s)",
                type(handler).__name__,
                code,
                channel_id,
            )
            return handler.error_result()

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.services.action_handlers.base import CannedReplyHandler


class StartOrderHandler(CannedReplyHandler):
    codes = (ActionCode.START_ORDER,)
    message = (
        "🛒 *Vamos fazer seu pedido!*\n\n"
        "Primeiro, preciso saber qual restaurante você quer. "
        "Você já tem um em mente ou quer que eu mostre as opções próximas?"
    )
    wait_for_response = True


class HumanSupportHandler(CannedReplyHandler):
    codes = (ActionCode.HUMAN_SUPPORT,)
    message = (
        "👨‍💼 *Atendimento Humano*\n\n"
        "Estou transferindo você para um atendente humano. "
        "Aguarde um momento, você será atendido em breve."
    )
    wait_for_response = False

"""Location-based company lookups: nearby restaurants and operating hours."""

from __future__ import annotations

from app.core.action_codes import ActionCode
from app.schemas.catalog import Company
from app.schemas.intent import DispatchResult
from app.services.action_handlers.base import ActionContext, ActionHandler

NEARBY_RADIUS_KM = 5.0
NEARBY_MAX_RESULTS = 5
HOURS_RADIUS_KM = 2.0
HOURS_MAX_RESULTS = 3

LOCATION_REQUIRED_MESSAGE = (
    "Preciso da sua localização para encontrar restaurantes próximos. "
    "Por favor, compartilhe sua localização."
)
NOT_FOUND_MESSAGE = (
    "Não encontrei restaurantes próximos à sua localização. "
    "Tente aumentar o raio de busca ou verificar se a localização está correta."
)
HOURS_HEADER = "⏰ *Horários de funcionamento:*\n\n"
GENERIC_HOURS_MESSAGE = (
    HOURS_HEADER
    + "🏪 Restaurantes geralmente funcionam:\n"
    + "• Segunda a Sexta: 11h às 22h\n"
    + "• Sábados e Domingos: 12h às 23h\n\n"
    + "Horários podem variar por estabelecimento. "
    + "Quer ver os horários de algum restaurante específico?"
)


def format_company(company: Company) -> str:
    lines = [f"*{company.name}*", f"📞 {company.phone_number or ''}"]
    if company.address is not None:
        address = company.address
        lines.append(f"📍 {address.street or ''}, {address.number or ''}")
        lines.append(f"🏙️ {address.neighborhood or ''}, {address.city or ''}")
    if company.slogan is not None:
        lines.append(f"💬 {company.slogan}")
    return "\n".join(lines) + "\n\n"


class NearbyRestaurantsHandler(ActionHandler):
    codes = (ActionCode.SEARCH_NEARBY_RESTAURANTS,)
    error_message = "Desculpe, ocorreu um erro ao buscar restaurantes próximos. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        if not context.has_location():
            return DispatchResult(message=LOCATION_REQUIRED_MESSAGE, wait_for_response=True)

        latitude, longitude = context.coordinates()
        page = await context.catalog.companies_within_radius(
            latitude, longitude, NEARBY_RADIUS_KM
        )
        if not page.items:
            return DispatchResult(message=NOT_FOUND_MESSAGE, wait_for_response=True)

        message = "*Restaurantes próximos encontrados:*\n\n"
        message += "".join(
            format_company(company) for company in page.items[:NEARBY_MAX_RESULTS]
        )
        return DispatchResult(
            message=message,
            wait_for_response=True,
            side_data={"found_companies": [company.id for company in page.items]},
        )


class OperatingHoursHandler(ActionHandler):
    codes = (ActionCode.CHECK_OPERATING_HOURS,)
    error_message = "Desculpe, ocorreu um erro ao verificar os horários. Tente novamente."

    async def handle(self, context: ActionContext) -> DispatchResult:
        if context.has_location():
            latitude, longitude = context.coordinates()
            page = await context.catalog.companies_within_radius(
                latitude, longitude, HOURS_RADIUS_KM
            )
            if page.items:
                message = HOURS_HEADER
                for company in page.items[:HOURS_MAX_RESULTS]:
                    message += f"🏪 *{company.name}*\n"
                    message += "• Horários: Consulte diretamente o estabelecimento\n\n"
                return DispatchResult(message=message, wait_for_response=False)

        return DispatchResult(message=GENERIC_HOURS_MESSAGE, wait_for_response=True)

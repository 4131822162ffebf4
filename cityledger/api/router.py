"""Top-level API router aggregation."""

from fastapi import APIRouter

from cityledger.api.routes.cities import router as cities_router
from cityledger.api.routes.clients import router as clients_router
from cityledger.api.routes.exchange_rate import router as exchange_rate_router
from cityledger.api.routes.ledger import router as ledger_router

api_router = APIRouter()
api_router.include_router(cities_router)
api_router.include_router(clients_router)
api_router.include_router(ledger_router)
api_router.include_router(exchange_rate_router)

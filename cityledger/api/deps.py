"""Dependency helpers for API layer."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cityledger.database.session import get_db_session
from cityledger.ledger.service import LedgerService
from cityledger.services.balance_service import BalanceService
from cityledger.services.city_service import CityService
from cityledger.services.client_service import ClientService
from cityledger.services.exchange_rate_service import ExchangeRateService


async def get_session(session: AsyncSession = Depends(get_db_session)) -> AsyncSession:
    """Pass through DB session dependency for explicit typing."""

    return session


def get_city_service() -> CityService:
    return CityService()


def get_client_service() -> ClientService:
    return ClientService()


def get_ledger_service() -> LedgerService:
    return LedgerService()


def get_exchange_rate_service() -> ExchangeRateService:
    """Build rate service with defaults from settings."""

    return ExchangeRateService()


def get_balance_service(
    ledger_service: LedgerService = Depends(get_ledger_service),
    rate_service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> BalanceService:
    """Build the summary service on top of the ledger and rate services."""

    return BalanceService(ledger_service=ledger_service, rate_service=rate_service)

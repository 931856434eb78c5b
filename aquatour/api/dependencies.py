"""Request Dependencies — per-request gateway, actor, audit recorder and repositories.

Invariants:
    - One DataGateway per request; FastAPI's dependency cache shares it between
      the audit service and the repositories of that request
    - Actor comes from optional X-User-* headers; no headers -> anonymous actor (None)

Design Decisions:
    - Repositories built per request, never cached: they hold the request's session
"""

from typing import Callable

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from aquatour.config import get_settings
from aquatour.core.domain_types import Actor
from aquatour.infrastructure.database import DataGateway, get_db
from aquatour.infrastructure.password_hasher import BcryptPasswordHasher
from aquatour.services.access_log_service import AccessLogService
from aquatour.services.audit_service import AuditService
from aquatour.services.auth_service import AuthService
from aquatour.services.client_repository import ClientRepository
from aquatour.services.contact_repository import ContactRepository
from aquatour.services.destination_repository import DestinationRepository
from aquatour.services.entity_repository import EntityRepository
from aquatour.services.package_repository import PackageRepository
from aquatour.services.payment_repository import PaymentRepository
from aquatour.services.provider_repository import ProviderRepository
from aquatour.services.quote_repository import QuoteRepository
from aquatour.services.reservation_repository import ReservationRepository
from aquatour.services.system_service import SystemService
from aquatour.services.user_repository import UserRepository


async def get_gateway(db: AsyncSession = Depends(get_db)) -> DataGateway:
    return DataGateway(db)


def get_actor(
    x_user_id: int | None = Header(None),
    x_user_name: str | None = Header(None),
    x_user_role: str | None = Header(None),
) -> Actor | None:
    if x_user_id is None and x_user_name is None and x_user_role is None:
        return None
    return Actor(user_id=x_user_id, name=x_user_name, role=x_user_role)


def get_audit(gateway: DataGateway = Depends(get_gateway)) -> AuditService:
    return AuditService(gateway, enabled=get_settings().audit_enabled)


def _repository_provider(
    repository_cls: type[EntityRepository],
) -> Callable[..., EntityRepository]:
    def provide(
        gateway: DataGateway = Depends(get_gateway),
        audit: AuditService = Depends(get_audit),
    ) -> EntityRepository:
        return repository_cls(gateway, audit, get_settings().enum_mapping_mode)

    provide.__name__ = f"get_{repository_cls.kind.label}_repository"
    return provide


get_clients = _repository_provider(ClientRepository)
get_contacts = _repository_provider(ContactRepository)
get_providers = _repository_provider(ProviderRepository)
get_destinations = _repository_provider(DestinationRepository)
get_packages = _repository_provider(PackageRepository)
get_reservations = _repository_provider(ReservationRepository)
get_quotes = _repository_provider(QuoteRepository)
get_payments = _repository_provider(PaymentRepository)


def get_users(
    gateway: DataGateway = Depends(get_gateway),
    audit: AuditService = Depends(get_audit),
) -> UserRepository:
    settings = get_settings()
    return UserRepository(
        gateway, audit, settings.enum_mapping_mode,
        hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
    )


def get_access_logs(gateway: DataGateway = Depends(get_gateway)) -> AccessLogService:
    return AccessLogService(gateway)


def get_auth(
    users: UserRepository = Depends(get_users),
    access_logs: AccessLogService = Depends(get_access_logs),
) -> AuthService:
    return AuthService(users, access_logs)


def get_system(
    gateway: DataGateway = Depends(get_gateway),
    audit: AuditService = Depends(get_audit),
) -> SystemService:
    return SystemService(gateway, audit)

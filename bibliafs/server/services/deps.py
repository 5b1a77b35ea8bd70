"""
Service Dependencies.

Provides repositories and domain services to API endpoints. Per-request
services are built on the request's session; HTTP-backed clients (Bible API,
Stripe) are process-wide singletons closed by the app lifespan.
"""

from typing import Annotated, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bibliafs.ai import AIQuotaService, StudyAssistant
from bibliafs.bible import BibleApiClient
from bibliafs.core.database import get_session
from bibliafs.core.database.repositories.bundle import RepoBundle, build_repos
from bibliafs.gamification import GamificationService
from bibliafs.groups import GroupAccessPolicy
from bibliafs.notifications import PushNotificationService
from bibliafs.payments import PaymentGateway
from bibliafs.server.core.config import settings

_bible_client: Optional[BibleApiClient] = None
_payment_gateway: Optional[PaymentGateway] = None
_study_assistant: Optional[StudyAssistant] = None


async def get_repos(session: AsyncSession = Depends(get_session)) -> RepoBundle:
    return build_repos(session)


RepoBundleDep = Annotated[RepoBundle, Depends(get_repos)]


def get_bible_client() -> BibleApiClient:
    global _bible_client
    if _bible_client is None:
        config = settings.bible_api
        _bible_client = BibleApiClient(
            config.base_url, token=config.token, timeout=config.timeout, retries=config.retries
        )
    return _bible_client


def get_payment_gateway() -> PaymentGateway:
    global _payment_gateway
    if _payment_gateway is None:
        _payment_gateway = PaymentGateway(settings.stripe)
    return _payment_gateway


def get_study_assistant() -> StudyAssistant:
    global _study_assistant
    if _study_assistant is None:
        _study_assistant = StudyAssistant(settings.openai)
    return _study_assistant


def build_push_service(repos: RepoBundle) -> PushNotificationService:
    return PushNotificationService(repos, settings.web_push)


def get_push_service(repos: RepoBundleDep) -> PushNotificationService:
    return build_push_service(repos)


def get_gamification_service(repos: RepoBundleDep) -> GamificationService:
    return GamificationService(repos)


def get_quota_service(repos: RepoBundleDep) -> AIQuotaService:
    return AIQuotaService(repos.users)


def get_group_policy(repos: RepoBundleDep) -> GroupAccessPolicy:
    return GroupAccessPolicy(repos)


async def close_shared_clients() -> None:
    """Release the process-wide HTTP clients."""
    global _bible_client, _payment_gateway, _study_assistant
    if _bible_client is not None:
        await _bible_client.aclose()
    _bible_client = None
    _payment_gateway = None
    _study_assistant = None


BibleClientDep = Annotated[BibleApiClient, Depends(get_bible_client)]
PaymentGatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]
StudyAssistantDep = Annotated[StudyAssistant, Depends(get_study_assistant)]
PushServiceDep = Annotated[PushNotificationService, Depends(get_push_service)]
GamificationDep = Annotated[GamificationService, Depends(get_gamification_service)]
QuotaServiceDep = Annotated[AIQuotaService, Depends(get_quota_service)]
GroupPolicyDep = Annotated[GroupAccessPolicy, Depends(get_group_policy)]

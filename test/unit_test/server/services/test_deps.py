"""Unit tests for server services dependencies.

Tests verify the shared client singletons, their release on shutdown and the
per-request services built on a repository bundle.
"""

import pytest

from bibliafs.ai import AIQuotaService
from bibliafs.gamification import GamificationService
from bibliafs.groups import GroupAccessPolicy
from bibliafs.notifications import PushNotificationService
from bibliafs.server.services import deps


@pytest.fixture(autouse=True)
async def reset_shared_clients():
    await deps.close_shared_clients()
    yield
    await deps.close_shared_clients()


class TestSharedClients:
    def test_bible_client_is_reused(self):
        assert deps.get_bible_client() is deps.get_bible_client()

    def test_payment_gateway_is_reused(self):
        assert deps.get_payment_gateway() is deps.get_payment_gateway()

    def test_study_assistant_is_reused(self):
        assert deps.get_study_assistant() is deps.get_study_assistant()

    async def test_close_releases_singletons(self):
        bible = deps.get_bible_client()
        gateway = deps.get_payment_gateway()

        await deps.close_shared_clients()

        assert deps.get_bible_client() is not bible
        assert deps.get_payment_gateway() is not gateway

    async def test_close_without_clients_is_a_no_op(self):
        await deps.close_shared_clients()
        await deps.close_shared_clients()


class TestRequestServices:
    def test_services_share_the_bundle(self, repos):
        push = deps.get_push_service(repos)

        assert isinstance(push, PushNotificationService)
        assert isinstance(deps.get_gamification_service(repos), GamificationService)
        assert isinstance(deps.get_quota_service(repos), AIQuotaService)
        assert isinstance(deps.get_group_policy(repos), GroupAccessPolicy)

    def test_dependency_aliases_are_annotated(self):
        for dep in (deps.RepoBundleDep, deps.BibleClientDep, deps.PushServiceDep, deps.GroupPolicyDep):
            assert hasattr(dep, "__metadata__")
            assert dep.__metadata__[0].dependency is not None

"""Fixtures for exercising the FastAPI app in-process.

The app runs on ``httpx.ASGITransport`` (the lifespan is not started), with
the database session, Bible API client, Stripe gateway, study assistant and
push service replaced through ``app.dependency_overrides``. Authentication is
real: requests carry HS256 tokens signed with a test secret.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import jwt
import pytest
from pydantic_ai.models.test import TestModel

from bibliafs.ai import StudyAssistant
from bibliafs.bible import BibleApiClient
from bibliafs.core.database import get_session
from bibliafs.notifications import PushNotificationService
from bibliafs.payments import PaymentGateway
from bibliafs.server.core.config import OpenAIConfig, StripeConfig, WebPushConfig, settings
from bibliafs.server.main import app
from bibliafs.server.services.deps import (
    RepoBundleDep,
    get_bible_client,
    get_payment_gateway,
    get_push_service,
    get_study_assistant,
)

JWT_SECRET = "unit-test-jwt-secret-at-least-32-bytes"
VAPID = WebPushConfig(public_key="vapid-public", private_key="vapid-private", subject="mailto:test@example.com")


class BibleUpstream:
    """Canned ABíbliaDigital responses keyed by path; unknown paths answer 503."""

    def __init__(self) -> None:
        self.responses: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        if path in self.responses:
            return httpx.Response(200, json=self.responses[path])
        return httpx.Response(503, json={"msg": "unavailable"})


class PushRecorder:
    """Stands in for ``pywebpush.webpush``."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, **kwargs: Any) -> None:
        self.calls.append(kwargs)


@pytest.fixture
def jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "supabase_jwt_secret", JWT_SECRET)
    return JWT_SECRET


@pytest.fixture
def token_for(jwt_secret) -> Callable[..., Dict[str, str]]:
    """Build Authorization headers for a user id; extra keyword arguments become claims."""

    def _headers(user_id: str, email: Optional[str] = None, **claims: Any) -> Dict[str, str]:
        payload = {"sub": user_id, "aud": "authenticated", "email": email or f"{user_id}@example.com", **claims}
        return {"Authorization": f"Bearer {jwt.encode(payload, jwt_secret, algorithm='HS256')}"}

    return _headers


@pytest.fixture
def bible_upstream() -> BibleUpstream:
    return BibleUpstream()


@pytest.fixture
def assistant_model() -> SimpleNamespace:
    """Mutable holder so a test can swap the model before calling an AI route."""
    return SimpleNamespace(model=TestModel(custom_output_text="Resposta sobre o versículo."))


@pytest.fixture
def stripe_client() -> MagicMock:
    client = MagicMock()
    client.customers.create.return_value = SimpleNamespace(id="cus_test")
    client.checkout.sessions.create.return_value = SimpleNamespace(id="cs_test", url="https://checkout.test/cs_test")
    client.billing_portal.sessions.create.return_value = SimpleNamespace(url="https://billing.test/session")
    client.subscriptions.cancel.return_value = SimpleNamespace(id="sub_test", status="canceled")
    client.payment_intents.create.return_value = SimpleNamespace(client_secret="pi_secret")
    return client


@pytest.fixture
def push_sender() -> PushRecorder:
    return PushRecorder()


@pytest.fixture
async def client(session, bible_upstream, assistant_model, stripe_client, push_sender, jwt_secret):
    async def _session():
        yield session

    bible_http = httpx.AsyncClient(transport=httpx.MockTransport(bible_upstream.handler))
    bible = BibleApiClient("http://mock/api", client=bible_http, retries=0, retry_delay=0)
    gateway = PaymentGateway(StripeConfig(secret_key="sk_test", app_url="http://app.test"), client=stripe_client)

    def _push(repos: RepoBundleDep) -> PushNotificationService:
        return PushNotificationService(repos, VAPID, sender=push_sender)

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_bible_client] = lambda: bible
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_study_assistant] = lambda: StudyAssistant(OpenAIConfig(), model=assistant_model.model)
    app.dependency_overrides[get_push_service] = _push

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://localhost") as http:
        yield http

    app.dependency_overrides.clear()
    await bible_http.aclose()

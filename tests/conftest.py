import os

# La config est lue à l'import: variables de test posées avant d'importer l'app
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")

import pytest
from typing import Generator, Dict, Any
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from storefront.app import app as fastapi_app
from storefront.utils.security import require_user, require_admin
from storefront.payments.gateway import TransactionResult, get_payment_gateway

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Simuler un utilisateur authentifié pour les endpoints protégés
@pytest.fixture(autouse=True)
def _override_require_user(app):
    fake_user: Dict[str, Any] = {"_id": "test-user"}
    app.dependency_overrides[require_user] = lambda: fake_user
    try:
        yield
    finally:
        app.dependency_overrides.pop(require_user, None)

@pytest.fixture
def admin_client(app, client):
    app.dependency_overrides[require_admin] = lambda: {"_id": "admin-user-id"}
    yield client
    app.dependency_overrides.pop(require_admin, None)

class FakeGateway:
    """Passerelle en mémoire: mêmes coroutines que BraintreePaymentGateway."""

    def __init__(self):
        self.generate_client_token = AsyncMock(return_value="client-token-123")
        self.charge = AsyncMock(return_value=TransactionResult(
            success=True,
            transaction_id="txn_1",
            status="submitted_for_settlement",
            amount="30.0",
        ))

@pytest.fixture
def fake_gateway(app):
    gateway = FakeGateway()
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    try:
        yield gateway
    finally:
        app.dependency_overrides.pop(get_payment_gateway, None)

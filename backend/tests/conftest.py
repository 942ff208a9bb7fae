"""Pytest configuration and fixtures for SnapAML tests.

Each test gets its own in-memory SQLite database (aiosqlite) with the
full schema created from the models, and an HTTP client wired to it.
Rate limiting is switched off so tests never need Redis.
"""

import copy
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from snapaml.auth.deps import CurrentUser
from snapaml.auth.jwt import create_access_token
from snapaml.database import Base, get_db
from snapaml.main import app
from snapaml.services.storage import DocumentStorage, get_document_storage
from snapaml.wizard.gateway import SubmissionGateway
from snapaml.wizard.variants import KYB


# ── Sample step payloads (camelCase, as the web client sends them) ──

KYB_STEPS = {
    1: {
        "companyName": "Acme Trading Ltd",
        "tradesUnderDifferentName": False,
        "companyRegistrationNumber": "ABC123",
        "companyRegistrationDate": "2020-05-01T00:00:00.000Z",
        "entityType": "limited-company",
        "websiteOrBusinessChannel": "https://acme.example",
        "countryOfRegistration": "Ireland",
    },
    2: {
        "industry": "Technology",
        "subIndustry": "Software development",
        "goodsOrServices": "services",
    },
    3: {
        "incomingPaymentsMonthlyEuro": "10000-50000",
        "incomingPaymentCountries": "Ireland, Germany",
        "incomingTransactionAmount": "500-1000",
        "outgoingPaymentsMonthlyEuro": "5000-10000",
        "outgoingPaymentCountries": "Ireland",
        "outgoingTransactionAmount": "100-500",
    },
    4: {
        "applicantFirstName": "Ada",
        "applicantLastName": "Byrne",
        "applicantEmail": "Ada.Byrne@Acme.example",
    },
}

KYC_STEPS = {
    1: {
        "fullName": "Jane Murphy",
        "dateOfBirth": "1990-02-14",
        "placeOfBirth": "Cork",
        "nationality": "Irish",
        "additionalCitizenships": "",
        "residentialAddress": "12 Harbour Road, Cork",
        "lengthOfResidence": "5 years",
        "contactEmail": "jane@example.com",
        "contactPhone": "+353861234567",
    },
    2: {
        "documentType": "passport",
        "documentNumber": "PA1234567",
        "issuingCountry": "Ireland",
        "expiryDate": "2031-08-30",
        "documentReference": "user-1/passport.pdf",
    },
    3: {
        "isUSPerson": False,
        "taxResidencyCountries": "Ireland",
        "taxIdentificationNumbers": "1234567TA",
    },
    4: {
        "occupation": "Engineer",
        "employer": "Acme Trading Ltd",
        "annualIncome": "50k-100k",
        "sourceOfFunds": "Salary from employment",
        "sourceOfWealth": "Savings and salary",
    },
}


@pytest.fixture
def kyb_payloads() -> dict[int, dict]:
    return copy.deepcopy(KYB_STEPS)


@pytest.fixture
def kyc_payloads(uploaded_document) -> dict[int, dict]:
    """KYC steps whose identification step points at a stored upload."""
    return copy.deepcopy(KYC_STEPS)


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def document_storage(tmp_path) -> DocumentStorage:
    return DocumentStorage(tmp_path / "documents")


@pytest.fixture
def uploaded_document(document_storage) -> str:
    """The PDF that `KYC_STEPS[2]` references, stored for "user-1"."""
    reference = KYC_STEPS[2]["documentReference"]
    path = document_storage.path_for(reference)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF-1.4\n%%EOF\n")
    return reference


@pytest_asyncio.fixture
async def client(session_factory, document_storage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with one committed transaction per request, like get_db."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_storage] = lambda: document_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Auth Fixtures ────────────────────────────────────────────────

@pytest.fixture
def make_headers() -> Callable[..., dict]:
    """Build bearer headers for an arbitrary user."""

    def _make(user_id: str, email: str | None = None) -> dict:
        token = create_access_token(user_id=user_id, email=email or f"{user_id}@example.com")
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def auth_headers(make_headers) -> dict:
    return make_headers("user-1", "owner@acme.example")


# ── Data Fixtures ────────────────────────────────────────────────

@pytest_asyncio.fixture
async def completed_company(db_session: AsyncSession):
    """A user ("company-owner") whose KYB wizard is fully completed."""
    user = CurrentUser(id="company-owner", email="owner@acme.example")
    gateway = SubmissionGateway(db_session, user, KYB)
    for step, payload in KYB_STEPS.items():
        schema = KYB.step(step).schema
        await gateway.submit(step, schema.model_validate(payload))
    submission = await gateway.load()
    await db_session.commit()
    return submission

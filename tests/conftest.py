import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SEED_MANAGER"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from vacay.database import Base, get_db
from vacay.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

EMPLOYEE_PASSWORD = "secret1"
MANAGER_PASSWORD = "manager1"


@pytest.fixture(scope="function")
def engine():
    """A fresh in-memory database per test; foreign keys are enabled by vacay.database."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def make_user(db_session):
    """Insert a user directly, bypassing the API."""
    from vacay.models.user import User, UserRole
    from vacay.services import auth as auth_service

    counter = {"n": 0}

    def _make_user(name, email, password=EMPLOYEE_PASSWORD, role=UserRole.EMPLOYEE, employee_code=None):
        counter["n"] += 1
        user = User(
            name=name,
            email=email,
            employee_code=employee_code or f"900-900-{counter['n']:03d}",
            role=role,
            password_hash=auth_service.get_password_hash(password),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture(scope="function")
def manager_user(make_user):
    from vacay.models.user import UserRole
    return make_user("Maria Manager", "manager@example.com", MANAGER_PASSWORD, UserRole.MANAGER)


@pytest.fixture(scope="function")
def employee_user(make_user):
    return make_user("Eddie Employee", "eddie@example.com")


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def server_error_client(db_session):
    """Like `client`, but unhandled errors come back as the 500 response instead of being re-raised."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def login(client):
    """Log the shared client in as the given account (replaces any previous session)."""
    def _login(email, password):
        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response
    return _login


@pytest.fixture(scope="function")
def as_manager(login, manager_user):
    login(manager_user.email, MANAGER_PASSWORD)
    return manager_user


@pytest.fixture(scope="function")
def as_employee(login, employee_user):
    login(employee_user.email, EMPLOYEE_PASSWORD)
    return employee_user

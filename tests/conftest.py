import pytest
from fastapi.testclient import TestClient

from app.core.security import hash_password
from app.core.tokens import create_access_token
from app.db.base import Base
from app.db.session import make_engine, make_session_factory
from app.main import create_app
from app.models.account import Account
from app.services.registry import CertificateRegistry

DEPLOYER = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
ISSUER = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
STRANGER = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"
ZERO = "0x0000000000000000000000000000000000000000"


class FakeClock:
    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def tick(self, seconds: int = 1) -> int:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def registry(session_factory, clock):
    reg = CertificateRegistry(session_factory, clock=clock)
    reg.deploy(DEPLOYER)
    return reg


@pytest.fixture
def client(registry):
    with TestClient(create_app(registry, bootstrap=False)) as c:
        yield c


def auth_headers(identity: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=identity)}"}


@pytest.fixture
def account(session_factory):
    def _make(identity: str, password: str = "s3cret-pass") -> str:
        with session_factory() as db:
            db.add(Account(identity=identity, hashed_password=hash_password(password)))
            db.commit()
        return password
    return _make

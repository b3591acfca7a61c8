import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from preview.core.options import reset_defaults
from preview.main import app


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture(autouse=True)
def _restore_defaults():
    reset_defaults()
    yield
    reset_defaults()

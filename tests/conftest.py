from unittest.mock import MagicMock

import pytest

from infrastructure.api.http_client import ApiClient
from tests.factories import make_user
from use_cases.session_store import SessionStore


@pytest.fixture
def api():
    return MagicMock(spec=ApiClient)


@pytest.fixture
def make_store(api):
    def _make(role="client", planner_status="approved", storage=None, navigate=None):
        store = SessionStore(api, storage=storage, navigate=navigate)
        if role is not None:
            store.user = make_user(role, planner_status)
            store.is_authenticated = True
        return store
    return _make

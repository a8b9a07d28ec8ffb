import pytest
from unittest.mock import MagicMock

from storefront.payments import repository

class _Resp:
    def __init__(self, data=None):
        self.data = data

def _client(data=None, error=None):
    client = MagicMock()
    execute = client.table.return_value.insert.return_value.execute
    if error is not None:
        execute.side_effect = error
    else:
        execute.return_value = _Resp(data)
    return client

def test_insert_order_returns_created_row(monkeypatch):
    client = _client(data=[{"id": "order-1", "buyer": "u1"}])
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: client)

    row = repository.insert_order({"buyer": "u1", "products": []})

    client.table.assert_called_once_with("orders")
    client.table.return_value.insert.assert_called_once_with({"buyer": "u1", "products": []})
    assert row == {"id": "order-1", "buyer": "u1"}

def test_insert_order_without_returned_rows(monkeypatch):
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: _client(data=[]))
    assert repository.insert_order({"buyer": "u1"}) == {"buyer": "u1"}

def test_insert_order_propagates_errors(monkeypatch):
    monkeypatch.setattr(
        "storefront.infra.supabase_client.get_service_supabase",
        lambda: _client(error=Exception("Database error")),
    )
    with pytest.raises(Exception, match="Database error"):
        repository.insert_order({"buyer": "u1"})

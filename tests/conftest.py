from __future__ import annotations

import pytest

from docfill.context import GlobalEvaluationContext
from docfill.resolution import PlaceholderResolver
from docfill.results import WarningCollector
from docfill.types import ProcessingOptions

from tests.infrastructure import make_document


@pytest.fixture
def order_data():
    """Типичная модель данных: заказ с клиентом и позициями."""
    return {
        "OrderId": 1042,
        "Customer": {"Name": "Alice", "Address": {"City": "Berlin"}, "IsVip": True},
        "Items": [
            {"Name": "Pen", "Qty": 2, "Price": 1.5},
            {"Name": "Book", "Qty": 1, "Price": 12},
            {"Name": "Lamp", "Qty": 3, "Price": 20.25},
        ],
        "Notes": None,
        "Tags": [],
    }


@pytest.fixture
def collector() -> WarningCollector:
    return WarningCollector()


@pytest.fixture
def resolver(collector) -> PlaceholderResolver:
    return PlaceholderResolver(ProcessingOptions(), collector)


@pytest.fixture
def global_ctx(order_data) -> GlobalEvaluationContext:
    return GlobalEvaluationContext(order_data)


@pytest.fixture
def doc_factory():
    """Фабрика документов: doc_factory("a", ["b", "c"])."""
    return make_document

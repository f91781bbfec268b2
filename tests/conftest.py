import pytest

from sqlassist.models import Table


@pytest.fixture
def shop_tables():
    """Five tables, so the grid has a second row"""
    return [
        {"name": "customers", "columns": [
            {"name": "id", "type": "integer", "is_primary": True},
            {"name": "email", "type": "varchar(255)", "is_primary": False},
        ]},
        {"name": "orders", "columns": [
            {"name": "id", "type": "integer", "is_primary": True},
            {"name": "customer_id", "type": "integer", "is_primary": False},
        ]},
        {"name": "products", "columns": [
            {"name": "id", "type": "integer", "is_primary": True},
        ]},
        {"name": "order_items", "columns": [
            {"name": "order_id", "type": "integer", "is_primary": True},
            {"name": "product_id", "type": "integer", "is_primary": True},
        ]},
        {"name": "reviews", "columns": []},
    ]


@pytest.fixture
def shop_relationships():
    return [
        {"table": "orders", "column": "customer_id", "references": {"table": "customers", "column": "id"}},
        {"table": "order_items", "column": "order_id", "references": {"table": "orders", "column": "id"}},
        {"table": "order_items", "column": "product_id", "references": {"table": "products", "column": "id"}},
    ]


@pytest.fixture
def table_models(shop_tables):
    return [Table.model_validate(t) for t in shop_tables]

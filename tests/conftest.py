"""
Pytest configuration and shared fixtures for the outfit engine tests.
"""
import os
import random
import sys
from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock, patch

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

# Settings require Supabase credentials; unit tests never reach the network
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-key")


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

def make_item(product_id: str, **kwargs: Any):
    """CatalogItem with published / in-stock defaults."""
    from outfits.models import CatalogItem

    defaults: Dict[str, Any] = dict(
        name=f"Item {product_id}",
        gender="Men",
        is_published=True,
        stock=10,
        price=999.0,
        rating=4.0,
    )
    defaults.update(kwargs)
    return CatalogItem(product_id=product_id, **defaults)


@pytest.fixture
def item_factory() -> Callable[..., Any]:
    """Factory for CatalogItem instances."""
    return make_item


@pytest.fixture
def men_catalog_items() -> List[Any]:
    """A small Men catalog around a white shirt base."""
    return [
        make_item("base-shirt", name="Oxford Shirt", category="Topwear", sub_category="Shirts",
                  master_category="Apparel", color_name="White", price=1499.0),
        make_item("jeans-navy", name="Slim Jeans", category="Bottomwear", sub_category="Jeans",
                  color_name="Navy", price=1999.0),
        make_item("trousers-olive", name="Formal Trousers", category="Bottomwear",
                  sub_category="Trousers", color_name="Olive", price=1799.0),
        make_item("shorts-red", name="Casual Shorts", category="Bottomwear", sub_category="Shorts",
                  color_name="Red", price=799.0),
        make_item("shoes-black", name="Leather Shoes", category="Footwear", sub_category="Shoes",
                  color_name="Black", price=2999.0),
        make_item("sneakers-white", name="Canvas Sneakers", category="Footwear",
                  sub_category="Sneakers", color_name="White", price=1599.0),
        make_item("watch-silver", name="Steel Watch", category="Accessories", sub_category="Watches",
                  color_name="Silver", price=3499.0),
        make_item("belt-brown", name="Leather Belt", category="Accessories", sub_category="Belts",
                  color_name="Brown", price=599.0),
        make_item("tee-blue", name="Crew Tee", category="Topwear", sub_category="T-Shirts",
                  color_name="Blue", price=499.0),
        make_item("lipstick", name="Matte Lipstick", category="Cosmetics", sub_category="Lipstick",
                  master_category="Personal Care", gender="Women", color_name="Red"),
    ]


@pytest.fixture
def men_catalog(men_catalog_items):
    """InMemoryCatalog over men_catalog_items."""
    from outfits.catalog import InMemoryCatalog
    return InMemoryCatalog(men_catalog_items)


@pytest.fixture
def seeded_rng() -> random.Random:
    """Seeded random source so sampled outfits are reproducible."""
    return random.Random(1234)


@pytest.fixture
def outfit_engine(men_catalog, seeded_rng):
    """OutfitEngine over the in-memory Men catalog."""
    from config.constants import OutfitLimits
    from services.outfit_engine import OutfitEngine
    return OutfitEngine(men_catalog, limits=OutfitLimits(), rng=seeded_rng)


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_supabase_client():
    """
    Mock Supabase client for unit tests.

    Every query-builder call returns the same builder so arbitrary chains
    (select().eq().gt().not_.in_().or_().order().range()) resolve to it.
    """
    mock_client = MagicMock()
    builder = MagicMock()
    for method in ("select", "eq", "neq", "gt", "in_", "or_", "order", "limit", "range"):
        getattr(builder, method).return_value = builder
    builder.not_ = builder
    builder.execute.return_value.data = []
    builder.execute.return_value.count = None
    mock_client.table.return_value = builder
    mock_client.builder = builder
    return mock_client


@pytest.fixture
def mock_supabase(mock_supabase_client):
    """Patch Supabase client creation."""
    with patch("supabase.create_client", return_value=mock_supabase_client):
        yield mock_supabase_client


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from api.app import create_app
    return create_app()


@pytest.fixture
def client(app, outfit_engine):
    """TestClient with the outfit engine dependency bound to the in-memory catalog."""
    from fastapi.testclient import TestClient
    from api.routes.outfits import get_engine

    app.dependency_overrides[get_engine] = lambda: outfit_engine
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "supabase: marks tests that require Supabase")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip tests that need live services when none are configured."""
    skip_integration = pytest.mark.skip(reason="Integration tests require running server")
    skip_supabase = pytest.mark.skip(reason="Supabase tests require credentials")

    server_url = os.getenv("TEST_SERVER_URL")
    supabase_url = os.getenv("SUPABASE_URL", "")
    has_supabase = bool(supabase_url) and "test.supabase.co" not in supabase_url

    for item in items:
        if "integration" in item.keywords and not server_url:
            item.add_marker(skip_integration)
        if "supabase" in item.keywords and not has_supabase:
            item.add_marker(skip_supabase)

"""
Tests for the configuration module.
"""

import pytest


class TestSettings:
    """Tests for Settings class."""

    def test_settings_loads_from_env(self):
        """Test that settings load from environment variables."""
        from config.settings import get_settings

        settings = get_settings()

        # Required fields should be present
        assert settings.supabase_url is not None
        assert settings.supabase_service_key is not None

        # Defaults should be applied
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080

    def test_is_development_property(self):
        """Test is_development property."""
        from config.settings import Settings

        for env in ["development", "dev", "local"]:
            settings = Settings(
                supabase_url="https://test.supabase.co",
                supabase_service_key="test-key",
                environment=env,
            )
            assert settings.is_development is True

        settings = Settings(
            supabase_url="https://test.supabase.co",
            supabase_service_key="test-key",
            environment="production",
        )
        assert settings.is_development is False
        assert settings.is_production is True

    def test_cors_origins_parsing(self):
        """Test that CORS origins can be parsed from comma-separated string."""
        from config.settings import Settings

        settings = Settings(
            supabase_url="https://test.supabase.co",
            supabase_service_key="test-key",
            cors_origins="http://localhost:3000,http://localhost:5173",
        )

        assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]

    def test_settings_for_testing(self):
        """Test get_settings_for_testing function."""
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(catalog_table="catalog_snapshot")

        assert settings.environment == "testing"
        assert settings.debug is True
        assert settings.catalog_table == "catalog_snapshot"
        assert "test" in settings.supabase_url


class TestOutfitSettings:
    """Outfit engine limits and their overrides."""

    def test_defaults_match_constants(self):
        from config.constants import DEFAULT_OUTFIT_LIMITS
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing()

        assert settings.catalog_table == "products"
        assert settings.outfit_ranked_max_items == DEFAULT_OUTFIT_LIMITS.RANKED_MAX_ITEMS
        assert settings.outfit_sampled_role_limits == DEFAULT_OUTFIT_LIMITS.SAMPLED_ROLE_LIMITS
        assert settings.outfit_request_timeout_seconds == DEFAULT_OUTFIT_LIMITS.REQUEST_TIMEOUT_SECONDS

    def test_role_limits_from_json(self):
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(outfit_sampled_role_limits='{"Top": 1, "Bottom": 2}')
        assert settings.outfit_sampled_role_limits == {"Top": 1, "Bottom": 2}

    def test_role_limits_from_pairs(self):
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(outfit_sampled_role_limits="Top=4, Footwear=1")
        assert settings.outfit_sampled_role_limits == {"Top": 4, "Footwear": 1}

    @pytest.mark.parametrize("field, value", [
        ("outfit_ranked_max_items", 0),
        ("outfit_candidate_pool_size", 0),
        ("outfit_fallback_extra", -1),
        ("outfit_request_timeout_seconds", 0),
    ])
    def test_invalid_limits_rejected(self, field, value):
        from pydantic import ValidationError
        from config.settings import get_settings_for_testing

        with pytest.raises(ValidationError):
            get_settings_for_testing(**{field: value})


class TestConstants:
    """Tests for constants module."""

    def test_outfit_limits_defaults(self):
        from config.constants import DEFAULT_OUTFIT_LIMITS

        assert DEFAULT_OUTFIT_LIMITS.RANKED_MAX_ITEMS == 3
        assert DEFAULT_OUTFIT_LIMITS.RANKED_ITEMS_PER_SLOT == 1
        assert DEFAULT_OUTFIT_LIMITS.SAMPLED_ROLE_LIMITS == {
            "Top": 3, "Bottom": 3, "Footwear": 2, "Accessory": 2,
        }
        assert DEFAULT_OUTFIT_LIMITS.CANDIDATE_POOL_SIZE == 200

    def test_catalog_select_covers_item_fields(self):
        from config.constants import CATALOG_SELECT

        columns = {c.strip() for c in CATALOG_SELECT.split(",")}
        for column in ("id", "gender", "category", "sub_category", "dominant_color_name",
                       "price", "rating", "is_published", "stock", "images"):
            assert column in columns


class TestDatabase:
    """Tests for database module."""

    @pytest.mark.supabase
    def test_supabase_client_singleton(self):
        """Test that get_supabase_client returns singleton."""
        from config.database import get_supabase_client

        assert get_supabase_client() is get_supabase_client()

    @pytest.mark.supabase
    def test_catalog_table_readable(self):
        """Test that the catalog table can be queried."""
        from config.database import get_supabase_client
        from config.settings import get_settings

        client = get_supabase_client()
        result = client.table(get_settings().catalog_table).select("id").limit(1).execute()

        assert result.data is not None

    def test_client_errors_are_wrapped(self):
        """Client creation failures surface as SupabaseClientError."""
        from unittest.mock import patch
        from config import database

        database.get_supabase_client.cache_clear()
        try:
            with patch.object(database, "create_client", side_effect=RuntimeError("boom")):
                with pytest.raises(database.SupabaseClientError, match="boom"):
                    database.get_supabase_client()
        finally:
            database.get_supabase_client.cache_clear()

    def test_health_engine_is_none_without_a_client(self, monkeypatch):
        """Health checks report not_configured instead of failing."""
        from unittest.mock import patch
        from api.routes.health import get_health_engine
        from config import database
        import services.outfit_engine as engine_module

        monkeypatch.setattr(engine_module, "_engine", None)
        database.get_supabase_client.cache_clear()
        try:
            with patch.object(database, "create_client", side_effect=RuntimeError("boom")):
                assert get_health_engine() is None
        finally:
            database.get_supabase_client.cache_clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""Tests for adapter factory wiring and auth providers."""

import pytest

from adapters.auth import NoAuthProvider, TokenAuthProvider
from core.config import Settings
from core.exceptions import AuthError
from core.factory import create_factory_from_settings
from services.rerank import LLMReranker


def _factory(**overrides):
    fields = {"DATABASE_URL": "sqlite+aiosqlite:///:memory:", "ANTHROPIC_API_KEY": None}
    fields.update(overrides)
    return create_factory_from_settings(Settings(**fields))


def test_source_order_with_hub():
    sources = _factory(HF_ENABLED=True).create_catalog_sources()
    assert [s.name for s in sources] == ["huggingface", "database", "static"]


def test_source_order_without_hub():
    sources = _factory(HF_ENABLED=False).create_catalog_sources()
    assert [s.name for s in sources] == ["database", "static"]


def test_reranker_requires_key():
    assert _factory().create_reranker() is None
    assert isinstance(_factory(ANTHROPIC_API_KEY="sk-test").create_reranker(), LLMReranker)


def test_auth_provider_selection():
    assert isinstance(_factory(AUTH_ENABLED=False).create_auth_provider(), NoAuthProvider)
    provider = _factory(AUTH_ENABLED=True, API_TOKENS={"tok": "alice"}).create_auth_provider()
    assert isinstance(provider, TokenAuthProvider)
    assert provider.requires_auth() is True


def test_recommendation_service_shares_given_catalog():
    factory = _factory(HF_ENABLED=False)
    catalog = factory.create_catalog_service()
    service = factory.create_recommendation_service(catalog=catalog)
    assert service.catalog is catalog


@pytest.mark.asyncio
async def test_token_provider_resolves_user():
    provider = TokenAuthProvider({"tok-a": "alice"})

    user = await provider.validate_token("tok-a")
    assert user.id == "alice"

    with pytest.raises(AuthError):
        await provider.validate_token("nope")
    with pytest.raises(AuthError):
        await provider.validate_token(None)


@pytest.mark.asyncio
async def test_no_auth_provider_always_default_user():
    provider = NoAuthProvider()
    assert (await provider.validate_token(None)).id == "default-user"
    assert provider.requires_auth() is False

import pytest

from studygen.core.config import Settings

from fakes.mock_llm import make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def keyless_settings() -> Settings:
    return make_settings(llm_api_key="")

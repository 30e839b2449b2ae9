import pytest
from pydantic import ValidationError

from cardgetter.core.config import DEFAULT_USER_AGENT, ScraperConfig


def test_defaults():
    cfg = ScraperConfig()
    assert cfg.check_robots_txt is True
    assert cfg.timeout == 10.0
    assert cfg.retries == 2
    assert cfg.max_attempts == 3
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert "facebookexternalhit" in cfg.user_agent
    assert cfg.tag_prefixes == ("og", "twitter", "airbedandbreakfast", "al", "article")
    assert cfg.raw_meta_names == ("cre",)


@pytest.mark.parametrize(
    "overrides",
    [{"timeout": 0}, {"timeout": -1.5}, {"retries": -1}, {"user_agent": "   "}],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        ScraperConfig(**overrides)


def test_prefixes_are_stored_without_colon():
    cfg = ScraperConfig(tag_prefixes=["og:", "fb", ":"])
    assert cfg.tag_prefixes == ("og", "fb")


def test_config_is_immutable():
    cfg = ScraperConfig()
    with pytest.raises(ValidationError):
        cfg.timeout = 1

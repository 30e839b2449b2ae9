from typing import Tuple

from pydantic import BaseModel, Field, field_validator

DEFAULT_USER_AGENT = (
    "CardGetter/1.0 (+https://github.com/cardgetter/cardgetter) "
    "(like GoogleBot and facebookexternalhit)"
)

# Apps can register their own OpenGraph prefixes; these are the ones we read.
DEFAULT_TAG_PREFIXES: Tuple[str, ...] = (
    "og",
    "twitter",
    "airbedandbreakfast",
    "al",
    "article",
)

# Meta names picked up verbatim besides "description".
DEFAULT_RAW_META_NAMES: Tuple[str, ...] = ("cre",)


class ScraperConfig(BaseModel):
    """
    Settings for fetching a card.

    Loading the values from the environment is left to the caller; this
    model only validates them.
    """

    check_robots_txt: bool = True

    # Transport: per-attempt timeout in seconds and retries after the first try
    timeout: float = 10.0
    retries: int = 2
    backoff_factor: float = 0.3
    user_agent: str = DEFAULT_USER_AGENT

    # Tag extraction vocabulary
    tag_prefixes: Tuple[str, ...] = Field(default=DEFAULT_TAG_PREFIXES)
    raw_meta_names: Tuple[str, ...] = Field(default=DEFAULT_RAW_META_NAMES)

    model_config = {"frozen": True}

    @property
    def max_attempts(self) -> int:
        return 1 + self.retries

    @field_validator("timeout")
    def timeout_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retries")
    def retries_must_not_be_negative(cls, v):
        if v < 0:
            raise ValueError("retries must not be negative")
        return v

    @field_validator("user_agent")
    def user_agent_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError("user_agent must not be blank")
        return v

    @field_validator("tag_prefixes")
    def prefixes_without_colon(cls, v):
        return tuple(p.rstrip(":") for p in v if p.strip(":"))

#!/usr/bin/env python3
"""
Scraper configuration.

Values come from keyword arguments first, then environment variables (a
local .env file is honoured), then the defaults below.
"""

import os
from typing import Any, Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from docparse.nav_parser import DEFAULT_SECTION_ANCHORS

DEFAULT_DOCS_URL = "https://core.telegram.org/bots/api"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ScraperOptions(BaseModel):
    """Options for fetching and converting the Bot API documentation."""
    docs_url: str = DEFAULT_DOCS_URL
    cache_file: str = "spec_cache.html"
    cache_ttl_hours: float = Field(default=24.0, ge=0)
    request_timeout: float = Field(default=30.0, gt=0)
    merge_union_types: bool = True
    section_anchors: List[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ANCHORS))

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScraperOptions":
        """
        Build options from the environment.

        Args:
            **overrides: Explicit values (e.g. from command-line flags); None is ignored

        Returns:
            Validated ScraperOptions
        """
        load_dotenv()

        values: Dict[str, Any] = {}
        env_map = {
            "docs_url": "BOTSPEC_DOCS_URL",
            "cache_file": "BOTSPEC_CACHE_FILE",
            "cache_ttl_hours": "BOTSPEC_CACHE_TTL_HOURS",
            "request_timeout": "BOTSPEC_TIMEOUT",
        }
        for field_name, env_name in env_map.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value

        merge = os.getenv("BOTSPEC_MERGE_UNIONS")
        if merge:
            values["merge_union_types"] = merge.strip().lower() in _TRUE_VALUES

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_hours * 3600

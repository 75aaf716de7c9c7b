"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    sources = config_dict.get("sources", [])
    if isinstance(sources, list):
        for source in sources:
            if isinstance(source, dict) and not source.get("enabled", True):
                name = source.get("name", "Unknown")
                warning_messages.append(f"Source '{name}' is disabled and will be skipped")
        if "sources" in config_dict and not sources:
            warning_messages.append("No sources configured; every run will return zero listings")

    advanced = config_dict.get("advanced", {})
    if isinstance(advanced, dict):
        max_jobs = advanced.get("max_jobs_per_source", 1000)
        if isinstance(max_jobs, int) and max_jobs > 5000:
            warning_messages.append(
                f"Large max_jobs_per_source ({max_jobs}) may cause performance issues"
            )
        if advanced.get("cache_ttl_seconds") == 0:
            warning_messages.append(
                "cache_ttl_seconds is 0; every run will hit the board APIs directly"
            )

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict):
        country_keywords = matching.get("country_keywords", {})
        if isinstance(country_keywords, dict):
            # A keyword listed under two countries always resolves to the first one
            owner: Dict[str, str] = {}
            for country, keywords in country_keywords.items():
                if not isinstance(keywords, list):
                    continue
                for keyword in keywords:
                    if not isinstance(keyword, str):
                        continue
                    normalized = keyword.strip().lower()
                    if normalized in owner and owner[normalized] != country:
                        warning_messages.append(
                            f"Location keyword '{normalized}' is listed for both "
                            f"{owner[normalized]} and {country}; {owner[normalized]} wins"
                        )
                    else:
                        owner.setdefault(normalized, country)

        role_keywords = matching.get("role_keywords")
        if isinstance(role_keywords, list) and not role_keywords:
            warning_messages.append("role_keywords is empty; no posting will pass the title filter")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)

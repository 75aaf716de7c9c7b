#!/usr/bin/env python3
"""Check that a configuration file (config.example.yaml by default) validates."""

import sys
from pathlib import Path

import yaml

from app.config.loader import validate_config_file


def verify_config_structure(config_file: Path) -> bool:
    """Validate the file and print a short summary of what it configures."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    if not validate_config_file(config_file):
        return False

    with open(config_file, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    sources = config.get("sources", [])
    matching = config.get("matching", {})
    print(f"  - {len(sources)} boards configured")
    print(f"  - {len(matching.get('role_keywords', []))} role keywords")
    print(f"  - {len(matching.get('country_keywords', {}))} target countries")
    print(f"  - {len(matching.get('match_reason_rules', []))} match reason rules")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config_structure(path) else 1)

# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Seed data handlers for the pattern store.

Validates ``(snippet, language)`` pairs before they reach the store and
reads seed files. Validation runs over the whole batch first so the store
can seed all-or-nothing.

Seed File Format (YAML):
    patterns:
      - snippet: "def bubble_sort(items): ..."
        language: python
      - snippet: "bubble_sort(...)"
        language: generic
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml

from omnisuggest.exceptions import SessionValidationError

logger = logging.getLogger(__name__)

SeedPair = tuple[str, str]


def validate_seed_pairs(pairs: Iterable[object]) -> list[SeedPair]:
    """Validate a batch of ``(snippet, language)`` pairs.

    Args:
        pairs: Candidate pairs (any iterable of 2-item sequences).

    Returns:
        The validated pairs with languages normalized to lowercase.

    Raises:
        SessionValidationError: If any pair is malformed. Reports the first
            offending index; nothing is returned for a partially valid batch.
    """
    validated: list[SeedPair] = []
    for index, pair in enumerate(pairs):
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            raise SessionValidationError(
                f"Seed entry {index} must be a (snippet, language) pair"
            )
        snippet, language = pair
        if not isinstance(snippet, str) or not snippet.strip():
            raise SessionValidationError(f"Seed entry {index} has an empty snippet")
        if not isinstance(language, str) or not language.strip():
            raise SessionValidationError(f"Seed entry {index} has an empty language")
        validated.append((snippet, language.strip().lower()))
    return validated


def load_seed_file(path: str | Path) -> list[SeedPair]:
    """Read seed pairs from a YAML seed file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated seed pairs in file order.

    Raises:
        SessionValidationError: If the file is missing, unparsable, or does
            not follow the seed file format.
    """
    seed_path = Path(path)
    try:
        document = yaml.safe_load(seed_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SessionValidationError(f"Cannot read seed file {seed_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SessionValidationError(f"Invalid YAML in seed file {seed_path}: {exc}") from exc

    if document is None:
        logger.warning("Seed file %s is empty", seed_path)
        return []

    entries = document.get("patterns") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        raise SessionValidationError(
            f"Seed file {seed_path} must contain a top-level 'patterns' list"
        )

    pairs: list[object] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SessionValidationError(
                f"Seed file {seed_path}: entry {index} must be a mapping"
            )
        pairs.append((entry.get("snippet"), entry.get("language", "generic")))

    validated = validate_seed_pairs(pairs)
    logger.debug("Loaded %d seed patterns from %s", len(validated), seed_path)
    return validated


__all__ = ["SeedPair", "load_seed_file", "validate_seed_pairs"]

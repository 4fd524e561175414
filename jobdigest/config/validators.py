"""Non-fatal checks on the raw configuration dictionary."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Check configuration for likely mistakes that are still valid.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    for source in config_dict.get("sources") or []:
        if isinstance(source, dict) and not source.get("enabled", True):
            warning_messages.append(
                f"Source '{source.get('type', 'unknown')}' is disabled and will be skipped"
            )

    preferences = config_dict.get("preferences") or {}
    hard_nos = config_dict.get("hardNos", config_dict.get("hard_nos")) or []
    if isinstance(preferences, dict) and isinstance(hard_nos, list):
        skills = preferences.get("skills") or []
        if isinstance(skills, list):
            normalized_skills = [s.strip().lower() for s in skills if isinstance(s, str)]

            # A Hard No that is a substring of a wanted skill removes exactly
            # the jobs the user asked for.
            conflicts = sorted(
                {
                    pattern.strip().lower()
                    for pattern in hard_nos
                    if isinstance(pattern, str) and pattern.strip()
                    and any(pattern.strip().lower() in skill for skill in normalized_skills)
                }
            )
            if conflicts:
                warning_messages.append(
                    f"Hard No patterns also match preferred skills: {', '.join(conflicts)}"
                )

            if len(normalized_skills) != len(set(normalized_skills)):
                duplicates = sorted({s for s in normalized_skills if normalized_skills.count(s) > 1})
                warning_messages.append(
                    f"Duplicate skills count twice towards the skill score: {', '.join(duplicates)}"
                )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)

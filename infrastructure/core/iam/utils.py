"""Reusable IAM helper utilities for permission grants."""

from __future__ import annotations

from typing import Iterable, Tuple

LOG_ACTIONS: Tuple[str, ...] = ("logs:*",)

ALL_RESOURCES: Tuple[str, ...] = ("*",)

EFFECT_ALLOW = "Allow"
EFFECT_DENY = "Deny"


def dedupe(values: Iterable[str]) -> list[str]:
    """Return items without duplicates while preserving order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        text = str(value or "").strip()
        if not text or text in seen:
            continue
        seen.add(text)
        result.append(text)
    return result


def normalize_effect(effect: str) -> str:
    """Return ``Allow``/``Deny`` for any casing of the effect name."""
    text = str(effect or "").strip().lower()
    if text == "allow":
        return EFFECT_ALLOW
    if text == "deny":
        return EFFECT_DENY
    raise ValueError(f"Unknown policy effect: {effect!r}")


def statement_key(
    principal: str, actions: Iterable[str], resources: Iterable[str], effect: str = EFFECT_ALLOW
) -> Tuple[str, str, Tuple[str, ...], Tuple[str, ...]]:
    """Return an order-insensitive identity for a policy statement.

    Policy statements behave like a set on the platform; two statements with
    the same principal, effect, actions and resources are the same grant.
    """
    return (
        str(principal),
        normalize_effect(effect),
        tuple(sorted(dedupe(actions))),
        tuple(sorted(dedupe(resources))),
    )

"""Utility helpers shared by the catalog loader."""

from __future__ import annotations

import typing as typ

from .models import CatalogError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, object], key: str, where: str) -> str:
    """Return ``payload[key]`` as a stripped string or raise CatalogError."""
    text = _optional_str(payload.get(key))
    if text is None:
        msg = f"{where} is missing '{key}'."
        raise CatalogError(msg)
    return text


def _text(value: object | None) -> str:
    """Return ``value`` as text, keeping inner whitespace, or an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def _string_list(value: object | None, where: str) -> tuple[str, ...]:
    """Normalize a YAML list of scalars into a tuple of non-empty strings."""
    match value:
        case None:
            return ()
        case list() as items:
            normalized: list[str] = []
            for item in items:
                text = str(item).strip()
                if text:
                    normalized.append(text)
            return tuple(normalized)
        case _:
            msg = f"{where} must be a list of strings."
            raise CatalogError(msg)


def _cost_table(value: object | None, where: str) -> tuple[tuple[str, str], ...]:
    """Return an ordered tuple of ``(item, cost)`` pairs from a YAML mapping."""
    match value:
        case None:
            return ()
        case dict() as mapping:
            return tuple((str(item), str(cost)) for item, cost in mapping.items())
        case _:
            msg = f"{where} must be a mapping of item to cost."
            raise CatalogError(msg)


def _ensure_unique(
    seen: dict[str, str], identifier: str, *, kind: str, where: str
) -> None:
    """Record ``identifier`` in ``seen`` or raise when it was already used."""
    if identifier in seen:
        msg = (
            f"Duplicate {kind} id '{identifier}' in {where} "
            f"(first used in {seen[identifier]})."
        )
        raise CatalogError(msg)
    seen[identifier] = where


__all__ = [
    "_cost_table",
    "_ensure_unique",
    "_optional_str",
    "_require_str",
    "_string_list",
    "_text",
]

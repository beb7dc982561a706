"""
Doctor-side views: grouping babies under their parents.
"""

from __future__ import annotations

from typing import Any


def _full_name(first: Any, last: Any) -> str:
    return f"{first or ''} {last or ''}".strip()


def group_babies_by_parent(rows: list[dict]) -> list[dict]:
    """
    Fold flat baby+parent rows into `[{parent_id, parent_name, babies: [...]}]`,
    keeping first-seen parent order.
    """
    parents: dict[int, dict] = {}
    for row in rows:
        parent = parents.setdefault(
            row["parent_id"],
            {
                "parent_id": row["parent_id"],
                "parent_name": _full_name(row["parent_first_name"], row["parent_last_name"]),
                "babies": [],
            },
        )
        parent["babies"].append(
            {
                "baby_id": row["baby_id"],
                "baby_name": _full_name(row["baby_first_name"], row["baby_last_name"]),
                "gender": row["gender"],
                "weight": row["weight"],
                "height": row["height"],
                "birthdate": row["birthdate"],
            }
        )
    return list(parents.values())


def baby_summary(row: dict) -> dict:
    return {
        "baby_id": row["baby_id"],
        "baby_name": _full_name(row["first_name"], row["last_name"]),
        "gender": row["gender"],
        "weight": row["weight"],
        "height": row["height"],
        "birthdate": row["birthdate"],
    }

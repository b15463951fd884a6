"""Batch conversion over a DataFrame of links.

``convert_frame`` is a pure function over DataFrames: it never mutates its
input and a bad link only fills that row's ``error`` column.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import pandas as pd

from agentlink.errors import LinkError
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind
from agentlink.transcoder import parse_listing, to_agent

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["marketplace", "id", "converted", "error"]


def convert_frame(
    df: pd.DataFrame,
    target: Agent | str | None,
    *,
    column: str = "link",
    referrals: Mapping[Agent, str] | None = None,
    tracking_tag: str | None = None,
    kind: ListingKind | str | None = None,
) -> pd.DataFrame:
    """Return a copy of *df* with the links in *column* converted.

    *target* ``None`` converts to raw marketplace links.  Adds the
    ``marketplace``, ``id``, ``converted`` and ``error`` columns.
    """
    if column not in df.columns:
        raise ValueError(f"Column {column!r} not found. Available: {list(df.columns)}")

    agent = Agent(target) if target is not None else None
    rows = [_convert_one(link, agent, referrals, tracking_tag, kind) for link in df[column]]

    result = df.copy()
    converted = pd.DataFrame(rows, columns=RESULT_COLUMNS, index=df.index)
    for name in RESULT_COLUMNS:
        result[name] = converted[name]

    failed = int(result["error"].notna().sum())
    logger.info(
        "Converted %d links to %s (%d failed)",
        len(result) - failed,
        agent.value if agent else "raw",
        failed,
    )
    return result


def _convert_one(
    link,
    agent: Agent | None,
    referrals: Mapping[Agent, str] | None,
    tracking_tag: str | None,
    kind: ListingKind | str | None,
) -> tuple:
    if not isinstance(link, str) or not link.strip():
        return (None, None, None, "empty link")
    try:
        ref = parse_listing(link.strip())
        if kind is not None:
            ref = ref.model_copy(update={"kind": ListingKind(kind)})
        if agent is None:
            converted = build_raw_link(ref.marketplace, ref.id, ref.kind)
        else:
            converted = to_agent(ref, agent, tracking_tag=tracking_tag, referrals=referrals)
    except LinkError as exc:
        return (None, None, None, str(exc))
    return (ref.marketplace.value, ref.id, converted, None)


def read_links(path: str | Path) -> pd.DataFrame:
    """Load a ``.csv`` or ``.json`` file of links."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str)
    if suffix == ".json":
        return pd.read_json(path, orient="records", dtype=False)
    raise ValueError(f"Unsupported links file type {suffix!r}; use .csv or .json")


def write_links(df: pd.DataFrame, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        df.to_json(path, orient="records", indent=2)
    else:
        df.to_csv(path, index=False)
    logger.info("Wrote %d rows to %s", len(df), path)

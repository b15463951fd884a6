"""Core data types shared by every module.

Marketplace and Agent are closed enums; ListingRef is the canonical,
immutable reference every link is converted through.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Marketplace(str, Enum):
    TAOBAO = "taobao"
    WEIDIAN = "weidian"
    ALI_1688 = "1688"
    TMALL = "tmall"


class ListingKind(str, Enum):
    """What the link points at: a single product or a seller's shop."""

    ITEM = "item"
    STORE = "store"


class Agent(str, Enum):
    ACBUY = "acbuy"
    ALLCHINABUY = "allchinabuy"
    BASETAO = "basetao"
    BLIKBUY = "blikbuy"
    CNFANS = "cnfans"
    CSSBUY = "cssbuy"
    EASTMALLBUY = "eastmallbuy"
    EZBUYCN = "ezbuycn"
    HAGOBUY = "hagobuy"
    HEGOBUY = "hegobuy"
    HOOBUY = "hoobuy"
    HUBBUYCN = "hubbuycn"
    JOYABUY = "joyabuy"
    KAMEYMALL = "kameymall"
    LOONGBUY = "loongbuy"
    LOVEGOBUY = "lovegobuy"
    MULEBUY = "mulebuy"
    OOPBUY = "oopbuy"
    ORIENTDIG = "orientdig"
    PANDABUY = "pandabuy"
    PANGLOBALBUY = "panglobalbuy"
    PONYBUY = "ponybuy"
    SIFUBUY = "sifubuy"
    SUGARGOO = "sugargoo"
    SUPERBUY = "superbuy"
    WEGOBUY = "wegobuy"


class ListingRef(BaseModel):
    """Canonical reference to a listing: marketplace, id and kind."""

    model_config = ConfigDict(frozen=True)

    marketplace: Marketplace
    id: str = Field(min_length=1)
    kind: ListingKind = ListingKind.ITEM


class SafeResult(BaseModel, Generic[T]):
    """Outcome of a non-raising call: either ``data`` or an ``error`` message."""

    success: bool
    data: T | None = None
    error: str | None = None

"""ListingLink — a listing plus the caller's referral codes.

Built once from any supported link, then rendered as any target with
``as_link``.  Serializes to the minimal ``{marketplace, id}`` record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from agentlink.cipher import Decryptor
from agentlink.errors import LinkError, UnknownAgent
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, ListingRef, Marketplace, SafeResult
from agentlink.transcoder import parse_listing, to_agent

_AGENT_NAMES = {a.value for a in Agent}


class ListingLink(BaseModel):
    marketplace: Marketplace
    id: str = Field(min_length=1)
    kind: ListingKind = ListingKind.ITEM
    referrals: dict[Agent, str] = Field(default_factory=dict)

    @classmethod
    def from_link(
        cls,
        href: str,
        referrals: dict[Agent, str] | None = None,
        *,
        decrypt: Decryptor | None = None,
    ) -> ListingLink:
        """Build from a raw or agent link.

        Raises a ``LinkError`` subclass when the link cannot be resolved to a
        marketplace listing, or ``UnknownAgent`` when *referrals* names an
        agent that does not exist.
        """
        ref = parse_listing(href, decrypt=decrypt)
        unknown = sorted(str(a) for a in (referrals or {}) if a not in _AGENT_NAMES)
        if unknown:
            raise UnknownAgent(f"Referrals name unknown agents {unknown}", href)
        return cls(
            marketplace=ref.marketplace,
            id=ref.id,
            kind=ref.kind,
            referrals=referrals or {},
        )

    @classmethod
    def safe_from_link(
        cls,
        href: str,
        referrals: dict[Agent, str] | None = None,
        **kwargs: Any,
    ) -> SafeResult[ListingLink]:
        """Like ``from_link`` but returns a ``SafeResult`` instead of raising.

        Example::

            result = ListingLink.safe_from_link(link)
            if result.success:
                print(result.data.as_link(Agent.CNFANS))
            else:
                print(result.error)
        """
        try:
            return SafeResult[ListingLink](
                success=True, data=cls.from_link(href, referrals, **kwargs)
            )
        except LinkError as exc:
            return SafeResult[ListingLink](success=False, error=str(exc))

    @property
    def ref(self) -> ListingRef:
        return ListingRef(marketplace=self.marketplace, id=self.id, kind=self.kind)

    def as_link(
        self,
        target: Agent | str | None = None,
        referral: str | None = None,
        tracking_tag: str | None = None,
    ) -> str:
        """Render as *target*'s link, or the raw marketplace link for ``None``.

        *referral* falls back to ``self.referrals[target]``.
        """
        if target is None:
            return build_raw_link(self.marketplace, self.id, self.kind)
        return to_agent(
            self.ref,
            target,
            referral,
            tracking_tag,
            referrals=self.referrals,
        )

    def serialize(self) -> dict[str, str]:
        record = {"marketplace": self.marketplace.value, "id": self.id}
        if self.kind is not ListingKind.ITEM:
            record["kind"] = self.kind.value
        return record

    @classmethod
    def deserialize(
        cls,
        record: dict[str, str],
        referrals: dict[Agent, str] | None = None,
    ) -> ListingLink:
        """Rebuild from a ``serialize()`` record by round-tripping its raw link."""
        kind = ListingKind(record.get("kind", ListingKind.ITEM))
        raw = build_raw_link(record["marketplace"], record["id"], kind)
        return cls.from_link(raw, referrals)

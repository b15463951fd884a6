"""Shared fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from agentlink.models import Marketplace

TEST_ID = "6481396504"


class RecordingDecryptor:
    """Stand-in for the cipher: remembers tokens, returns a fixed plaintext."""

    def __init__(self, plaintext: str) -> None:
        self.plaintext = plaintext
        self.tokens: list[str] = []

    def __call__(self, token: str) -> str:
        self.tokens.append(token)
        return self.plaintext


@pytest.fixture()
def listing_id() -> str:
    return TEST_ID


@pytest.fixture()
def raw_links() -> dict[Marketplace, str]:
    """Canonical raw item links for every marketplace."""
    return {
        Marketplace.TAOBAO: f"https://item.taobao.com/item.htm?id={TEST_ID}",
        Marketplace.WEIDIAN: f"https://weidian.com/item.html?itemID={TEST_ID}",
        Marketplace.ALI_1688: f"https://detail.1688.com/offer/{TEST_ID}.html",
        Marketplace.TMALL: f"https://detail.tmall.com/item.htm?id={TEST_ID}",
    }


@pytest.fixture()
def recording_decryptor() -> RecordingDecryptor:
    return RecordingDecryptor(
        "https://www.taobao.com/list/item/674680652328.htm"
        "?spm=a21wu.10013406.taglist-content.10.1d9865ebWR4RYC"
    )


@pytest.fixture()
def settings_file(tmp_path: Path) -> Path:
    """Write a small YAML settings file and return its path."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        'log_level: "warning"\n'
        "referrals:\n"
        '  cnfans: "FANS1"\n'
        '  pandabuy: "PANDA1"\n'
        'tracking_tag: "7"\n'
    )
    return path

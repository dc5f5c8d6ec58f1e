"""Tests for the command line interface."""

from __future__ import annotations

import httpx
import pytest

import cluster_client.__main__ as cli
from cluster_client.config import ClusterClientConfig
from cluster_client.feed import derive_feed_update_reference, get_all_sequence_update_references
from cluster_client.http import ClusterClient
from cluster_client.types import Bytes20, Bytes32
from tests.cluster_client.helpers import make_chunk_transport

REFERENCE = "c3c4733ec8affd06cf9e9ff50ffc6bcd2ec85a6170004bb709669c31de94391a"
MANIFEST_CID = "bah5acgzaypchgpwiv76qnt46t72q77dlzuxmqwtboaaexnyjm2oddxuuhena"
FEED_CID = "bah5qcgzaypchgpwiv76qnt46t72q77dlzuxmqwtboaaexnyjm2oddxuuhena"

OWNER_HEX = "00" * 20
TOPIC_HEX = "00" * 32


def use_transport(monkeypatch: pytest.MonkeyPatch, transport: httpx.AsyncBaseTransport) -> None:
    """Route the CLI's client through an in-memory transport."""

    def factory(config: ClusterClientConfig) -> ClusterClient:
        return ClusterClient(config, transport=transport)

    monkeypatch.setattr(cli, "ClusterClient", factory)


class TestEncodeDecode:
    """encode and decode sub-commands."""

    def test_encode_defaults_to_manifest(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --type a manifest CID is printed."""
        assert cli.main(["encode", REFERENCE]) == 0
        assert capsys.readouterr().out.strip() == MANIFEST_CID

    def test_encode_feed(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--type feed selects the feed codec."""
        assert cli.main(["encode", REFERENCE, "--type", "feed"]) == 0
        assert capsys.readouterr().out.strip() == FEED_CID

    def test_encode_invalid_reference(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed references exit with status 2."""
        assert cli.main(["encode", "abc"]) == 2
        assert capsys.readouterr().err.startswith("error: ")

    def test_decode(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Decoding prints the reference and its type."""
        assert cli.main(["decode", FEED_CID]) == 0
        assert capsys.readouterr().out.splitlines() == [REFERENCE, "feed"]

    def test_decode_unknown_codec(self, capsys: pytest.CaptureFixture[str]) -> None:
        """CIDs without a cluster codec decode with an unknown type."""
        foreign = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"
        assert cli.main(["decode", foreign]) == 0
        assert capsys.readouterr().out.splitlines() == [REFERENCE, "unknown"]

    def test_decode_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Unparseable CIDs exit with status 2."""
        assert cli.main(["decode", "not-a-cid"]) == 2
        assert "Failed to parse CID" in capsys.readouterr().err


class TestFeedAddress:
    """feed-address sub-command."""

    def test_prints_reference(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The update reference is printed as hex."""
        assert cli.main(["feed-address", "0x" + OWNER_HEX, TOPIC_HEX, "5"]) == 0
        expected = derive_feed_update_reference(Bytes20.zero(), Bytes32.zero(), 5)
        assert capsys.readouterr().out.strip() == expected

    def test_topic_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--topic-name hashes the topic argument."""
        assert cli.main(["feed-address", OWNER_HEX, "my-feed", "0", "--topic-name"]) == 0
        out = capsys.readouterr().out.strip()
        assert len(out) == 64

    @pytest.mark.parametrize(
        "argv",
        [
            ["feed-address", "00" * 19, TOPIC_HEX, "0"],
            ["feed-address", OWNER_HEX, "my-feed", "0"],
            ["feed-address", OWNER_HEX, TOPIC_HEX, "-1"],
        ],
        ids=["short-owner", "topic-not-hex", "negative-index"],
    )
    def test_invalid_arguments(self, argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed feed arguments exit with status 2."""
        assert cli.main(argv) == 2
        assert capsys.readouterr().err.startswith("error: ")


class TestVerifyFeed:
    """verify-feed sub-command."""

    def test_retrievable(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A complete feed exits 0."""
        refs = get_all_sequence_update_references(Bytes20.zero(), Bytes32.zero(), 2)
        use_transport(monkeypatch, make_chunk_transport({ref: b"u" for ref in refs}))
        assert cli.main(["verify-feed", OWNER_HEX, TOPIC_HEX, "2", "--max-concurrency", "2"]) == 0
        assert capsys.readouterr().out.strip() == "retrievable"

    def test_not_retrievable(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A feed with a missing update exits 1."""
        refs = get_all_sequence_update_references(Bytes20.zero(), Bytes32.zero(), 2)
        use_transport(monkeypatch, make_chunk_transport({ref: b"u" for ref in refs[:2]}))
        assert cli.main(["verify-feed", OWNER_HEX, TOPIC_HEX, "2"]) == 1
        assert capsys.readouterr().out.strip() == "not retrievable"

    def test_node_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A server error exits 2."""
        refs = get_all_sequence_update_references(Bytes20.zero(), Bytes32.zero(), 1)
        use_transport(
            monkeypatch,
            make_chunk_transport({ref: b"u" for ref in refs}, statuses={refs[1]: 500}),
        )
        assert cli.main(["verify-feed", OWNER_HEX, TOPIC_HEX, "1"]) == 2
        assert "HTTP error 500" in capsys.readouterr().err

    def test_invalid_url(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A bad --url exits 2 before any request."""
        assert cli.main(["verify-feed", OWNER_HEX, TOPIC_HEX, "1", "--url", "node:1633"]) == 2
        assert "URL is not valid" in capsys.readouterr().err

    def test_invalid_timeout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A non-positive --timeout exits 2."""
        assert cli.main(["verify-feed", OWNER_HEX, TOPIC_HEX, "1", "--timeout", "0"]) == 2
        assert capsys.readouterr().err.startswith("error: ")


def test_missing_command_exits() -> None:
    """A sub-command is required."""
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 2

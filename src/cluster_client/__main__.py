"""
Cluster reference tool.

Encode and decode reference CIDs, derive feed update addresses, and check
that a sequential feed is fully retrievable from a node.

Usage::

    python -m cluster_client encode <reference> --type manifest
    python -m cluster_client decode bah5acgza...
    python -m cluster_client feed-address <owner> <topic> 7
    python -m cluster_client verify-feed <owner> <topic> 7 --url http://localhost:1633

Owners are 40 hex characters and topics 64 hex characters, '0x' optional.
With --topic-name the topic argument is a name, hashed with keccak-256.

Exit codes:
    0  success (for verify-feed: every update is retrievable)
    1  verify-feed found at least one missing update
    2  invalid input or a node error
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from cluster_client.cid import ReferenceType, decode_cid, encode_reference
from cluster_client.config import CLUSTER_API_URL, ClusterClientConfig, RequestOptions
from cluster_client.feed import (
    are_all_sequential_feeds_update_retrievable,
    derive_feed_update_reference,
    make_topic,
    make_topic_from_hex,
)
from cluster_client.http import ClusterClient
from cluster_client.types import Bytes20, Bytes32, ClusterError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr, keeping stdout for results."""
    # force=True replaces handlers from an earlier call in the same process.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _parse_topic(value: str, by_name: bool) -> Bytes32:
    return make_topic(value) if by_name else make_topic_from_hex(value)


def _cmd_encode(args: argparse.Namespace) -> int:
    cid = encode_reference(args.reference, ReferenceType(args.type))
    print(cid)
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    result = decode_cid(args.cid)
    print(result.reference)
    print(result.type.value if result.type is not None else "unknown")
    return 0


def _cmd_feed_address(args: argparse.Namespace) -> int:
    topic = _parse_topic(args.topic, args.topic_name)
    print(derive_feed_update_reference(Bytes20(args.owner), topic, args.index))
    return 0


async def _verify_feed(args: argparse.Namespace) -> bool:
    topic = _parse_topic(args.topic, args.topic_name)
    options = RequestOptions(timeout=args.timeout, max_concurrency=args.max_concurrency)

    async with ClusterClient(ClusterClientConfig(url=args.url)) as client:
        return await are_all_sequential_feeds_update_retrievable(
            client, Bytes20(args.owner), topic, args.index, options
        )


def _cmd_verify_feed(args: argparse.Namespace) -> int:
    retrievable = asyncio.run(_verify_feed(args))
    print("retrievable" if retrievable else "not retrievable")
    return 0 if retrievable else 1


def _add_feed_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("owner", help="Feed owner address (40 hex characters)")
    parser.add_argument("topic", help="Feed topic (64 hex characters, or a name with --topic-name)")
    parser.add_argument("index", help="Feed index (decimal)")
    parser.add_argument(
        "--topic-name",
        action="store_true",
        help="Treat the topic argument as a name and hash it",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="cluster-client",
        description="Cluster reference tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    encode = commands.add_parser("encode", help="Encode a hex reference as a CID")
    encode.add_argument("reference", help="64-character hex reference")
    encode.add_argument(
        "--type",
        choices=[t.value for t in ReferenceType],
        default=ReferenceType.MANIFEST.value,
        help="Kind of content the reference points to (default: manifest)",
    )
    encode.set_defaults(handler=_cmd_encode)

    decode = commands.add_parser("decode", help="Decode a CID into a hex reference")
    decode.add_argument("cid", help="CID text")
    decode.set_defaults(handler=_cmd_decode)

    feed_address = commands.add_parser(
        "feed-address", help="Print the chunk reference of a feed update"
    )
    _add_feed_arguments(feed_address)
    feed_address.set_defaults(handler=_cmd_feed_address)

    verify = commands.add_parser(
        "verify-feed", help="Check that every update of a feed is retrievable"
    )
    _add_feed_arguments(verify)
    verify.add_argument(
        "--url",
        default=CLUSTER_API_URL,
        help=f"Node API URL (default: {CLUSTER_API_URL})",
    )
    verify.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds allowed for the whole verification",
    )
    verify.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Maximum chunks probed at once (default: unbounded)",
    )
    verify.set_defaults(handler=_cmd_verify_feed)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.handler(args)
    except (ClusterError, ValueError, TypeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except TimeoutError:
        print("error: verification timed out", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

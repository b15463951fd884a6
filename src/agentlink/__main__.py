"""CLI entry point — ``python -m agentlink``."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from agentlink.batch import convert_frame, read_links, write_links
from agentlink.config import load_settings
from agentlink.detector import agent_hosts
from agentlink.models import Agent, ListingKind
from agentlink.transcoder import safe_to_agent, safe_to_raw


def _print_agents() -> None:
    """Print every registered agent with its host patterns."""
    print("\nAGENTS")
    print("------")
    for agent, hosts in sorted(agent_hosts().items(), key=lambda kv: kv[0].value):
        print(f"  {agent.value:16s} {', '.join(hosts)}")
    print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="agentlink",
        description="Convert marketplace and shopping-agent links.",
    )
    parser.add_argument("links", nargs="*", help="Links to convert.")
    parser.add_argument(
        "-c", "--config",
        help="Path to a YAML settings file (referrals, log level, tracking tag).",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-t", "--to",
        choices=[a.value for a in Agent],
        metavar="AGENT",
        help="Target agent.",
    )
    target.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Convert to raw marketplace links.",
    )
    parser.add_argument("-r", "--referral", help="Referral code for the target agent.")
    parser.add_argument("--tracking", help="Tracking tag for agents that accept one.")
    parser.add_argument(
        "--kind",
        choices=[k.value for k in ListingKind],
        help="Treat every link as this listing kind.",
    )
    parser.add_argument("-i", "--input", help="CSV or JSON file of links to convert.")
    parser.add_argument("--column", default="link", help="Column holding the links (default: link).")
    parser.add_argument("-o", "--output", help="Where to write converted rows (default: stdout).")
    parser.add_argument(
        "-l", "--list-agents",
        action="store_true",
        default=False,
        help="List all registered agents and their hosts, then exit.",
    )

    args = parser.parse_args(argv)

    if args.list_agents:
        _print_agents()
        return 0

    if not args.to and not args.raw:
        parser.error("one of the arguments -t/--to --raw is required")
    if not args.links and not args.input:
        parser.error("give at least one link or -i/--input")

    settings = load_settings(args.config)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    tracking_tag = args.tracking or settings.tracking_tag
    referrals = dict(settings.referrals)
    if args.to and args.referral:
        referrals[Agent(args.to)] = args.referral

    failures = 0

    if args.input:
        df = convert_frame(
            read_links(args.input),
            None if args.raw else args.to,
            column=args.column,
            referrals=referrals,
            tracking_tag=tracking_tag,
            kind=args.kind,
        )
        failures += int(df["error"].notna().sum())
        if args.output:
            write_links(df, args.output)
        else:
            print(df.to_csv(index=False), end="")

    for link in args.links:
        if args.raw:
            result = safe_to_raw(link)
        else:
            result = safe_to_agent(
                link,
                args.to,
                args.referral,
                tracking_tag,
                referrals=referrals,
                kind=args.kind,
            )
        if result.success:
            print(result.data)
        else:
            failures += 1
            print(f"error: {result.error}", file=sys.stderr)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

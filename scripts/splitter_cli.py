#!/usr/bin/env python3
"""
Operate a persisted splitter ledger from the command line.

The ledger, owner, policy and database come from a configuration set
(splitter_config/sets/<name>.yaml).  SPLITTER_DATABASE_URL overrides the
database URL of the set.

Usage:
    python3 scripts/splitter_cli.py init
    python3 scripts/splitter_cli.py add-participant --caller 0xOWNER 0xALICE
    python3 scripts/splitter_cli.py split --caller 0xALICE 0xBOB 0xCAROL --value 2
    python3 scripts/splitter_cli.py withdraw --caller 0xBOB
    python3 scripts/splitter_cli.py balance 0xBOB
    python3 scripts/splitter_cli.py status
    python3 scripts/splitter_cli.py events --since 3
    python3 scripts/splitter_cli.py --config open --ledger team-b status

Exit codes:
    0  success
    1  the ledger rejected the call (message and error code on stderr)
    2  usage or configuration error
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from splitter_config import get_active_config  # noqa: E402
from splitter_config.bridges import (  # noqa: E402
    build_initial_participants,
    build_ledger_policy,
    build_owner,
)
from splitter_kernel.db.engine import (  # noqa: E402
    create_tables,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from splitter_kernel.domain.identity import Address  # noqa: E402
from splitter_kernel.exceptions import SplitterError  # noqa: E402
from splitter_kernel.logging_config import LogContext, configure_logging  # noqa: E402
from splitter_kernel.services.splitter_service import SplitterService  # noqa: E402


class ConsoleSink:
    """Value sink that reports each release on stdout."""

    def release(self, recipient: Address, amount: int) -> None:
        print(f"released {amount} to {recipient}")


def _address(raw: str) -> Address:
    try:
        return Address.parse(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _amount(raw: str) -> int:
    try:
        return int(raw, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer amount: {raw!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Two-way value splitter ledger.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        default="default",
        help="Configuration set name (default: default).",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding configuration sets (default: splitter_config/sets).",
    )
    parser.add_argument(
        "--ledger",
        default=None,
        help="Ledger code (default: the configuration set's ledger).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (e.g. DEBUG, WARNING).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create tables and open the configured ledger.")

    def with_caller(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--caller", required=True, type=_address, help="Identity making the call.")
        return p

    p = with_caller("add-participant", "Register a participant (owner only).")
    p.add_argument("participant", type=_address)

    p = with_caller("remove-participant", "Remove a participant (owner only).")
    p.add_argument("participant", type=_address)

    with_caller("pause", "Pause the ledger (owner only).")
    with_caller("unpause", "Resume the ledger (owner only).")

    p = with_caller("transfer-ownership", "Hand the owner role to another identity.")
    p.add_argument("new_owner", type=_address)

    p = with_caller("split", "Deposit a value and credit half to each recipient.")
    p.add_argument("recipient1", type=_address)
    p.add_argument("recipient2", type=_address)
    p.add_argument("--value", required=True, type=_amount, help="Even, positive amount.")

    with_caller("withdraw", "Claim the caller's whole balance.")

    sub.add_parser("participants", help="List active participants.")

    p = sub.add_parser("balance", help="Show the credited balance of an identity.")
    p.add_argument("identity", type=_address)

    sub.add_parser("status", help="Show the ledger summary.")

    p = sub.add_parser("events", help="Print the event journal as JSON lines.")
    p.add_argument("--since", type=int, default=0, help="Only events with a higher seq.")

    return parser


def _run(args: argparse.Namespace, config) -> int:
    ledger_code = args.ledger or config.ledger.ledger_code

    with session_scope() as session:
        if args.command == "init":
            service = SplitterService.open_ledger(
                session,
                ledger_code,
                build_owner(config),
                policy=build_ledger_policy(config),
                initial_participants=build_initial_participants(config),
            )
            print(f"opened ledger {ledger_code} owned by {service.owner()}")
            return 0

        service = SplitterService(session, ledger_code, sink=ConsoleSink())

        if args.command == "add-participant":
            added = service.add_participant(args.caller, args.participant)
            print("added" if added else "already a participant")
        elif args.command == "remove-participant":
            service.remove_participant(args.caller, args.participant)
            print("removed")
        elif args.command == "pause":
            service.pause(args.caller)
            print("paused")
        elif args.command == "unpause":
            service.unpause(args.caller)
            print("unpaused")
        elif args.command == "transfer-ownership":
            service.transfer_ownership(args.caller, args.new_owner)
            print(f"owner is now {args.new_owner}")
        elif args.command == "split":
            result = service.split_eth(
                args.caller, args.recipient1, args.recipient2, value=args.value
            )
            print(f"credited {result.share} to {result.recipient1} and {result.recipient2}")
        elif args.command == "withdraw":
            service.withdraw(args.caller)
        elif args.command == "participants":
            for participant in service.list_active_participants():
                print(participant)
        elif args.command == "balance":
            print(service.balance_of(args.identity))
        elif args.command == "status":
            status = service.status()
            print(f"ledger:        {status.ledger_code}")
            print(f"owner:         {status.owner}")
            print(f"paused:        {'yes' if status.paused else 'no'}")
            print(f"participants:  {status.participant_count}")
            print(f"held value:    {status.held_value}")
            print(f"owed:          {status.total_owed}")
            print(f"last event:    {status.last_event_seq}")
        elif args.command == "events":
            for event in service.events(since_seq=args.since):
                print(json.dumps(event.to_dict(), sort_keys=True))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_active_config(args.config, config_dir=args.config_dir)
    except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    configure_logging(level=(args.log_level or config.logging.level).upper())
    init_engine_from_url(
        config.database.url,
        echo=config.database.echo,
        pool_size=config.database.pool_size,
    )
    try:
        create_tables()
        with LogContext.bind(operation=args.command):
            return _run(args, config)
    except SplitterError as exc:
        print(f"ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1
    finally:
        reset_engine()


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Bet Ledger CLI.

Records bets and account movements against the configured database and
prints the dashboard summary.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from config.logging_config import bind_context, clear_context, setup_logging
from betledger.database import db
from betledger.exceptions import LedgerError, SettlementNotApplied
from betledger.ledger import BalanceReconciler
from betledger.models import BetDraft, BetStatus, Period
from betledger.reporting import format_summary
from betledger.stats import build_dashboard
from betledger.stores import SqlAccountStore, SqlBetStore


def _draft_from_args(args: argparse.Namespace) -> BetDraft:
    return BetDraft(
        match=args.match,
        stake=args.stake,
        odds=args.odds,
        status=BetStatus.parse(args.status),
        date=args.date,
    )


async def run(args: argparse.Namespace) -> int:
    """Execute one CLI command. Returns the process exit code."""
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)
    bind_context(command=args.command)
    await db.initialize()

    bet_store = SqlBetStore(db)
    account_store = SqlAccountStore(db)
    reconciler = BalanceReconciler(bet_store, account_store)

    try:
        if args.command == "add":
            result = await reconciler.create_bet(_draft_from_args(args))
            print(f"Bet saved: {result.bet_id} (balance change {result.delta:+.2f})")
        elif args.command == "edit":
            result = await reconciler.edit_bet(args.bet_id, _draft_from_args(args))
            print(f"Bet updated: {result.bet_id} (balance change {result.delta:+.2f})")
        elif args.command == "delete":
            await reconciler.delete_bet(args.bet_id, soft=args.soft)
            print(f"Bet deleted: {args.bet_id}")
        elif args.command == "deposit":
            account = await reconciler.deposit(args.amount)
            print(f"Deposited {args.amount:.2f}, balance {account.balance:.2f}")
        elif args.command == "withdraw":
            account = await reconciler.withdraw(args.amount)
            print(f"Withdrew {args.amount:.2f}, balance {account.balance:.2f}")
        elif args.command == "username":
            account = await reconciler.set_username(args.name)
            print(f"Username saved: {account.username}")
        elif args.command == "summary":
            bets = await bet_store.fetch_all()
            account = await account_store.read()
            snapshot = build_dashboard(
                bets,
                period=Period(args.period),
                recent_limit=settings.ledger.recent_bets_limit,
                chart_days=settings.ledger.chart_days,
            )
            print(format_summary(snapshot, account))
        return 0

    except SettlementNotApplied as e:
        # Bet is stored; the balance needs a manual correction
        print(f"WARNING: {e}", file=sys.stderr)
        return 2
    except LedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await db.close()
        clear_context()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal betting ledger")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_bet_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("match", type=str, help="Match or event label")
        sub.add_argument("stake", type=float, help="Stake amount")
        sub.add_argument("odds", type=float, help="Decimal odds")
        sub.add_argument(
            "--status",
            choices=["pending", "won", "lost"],
            default="pending",
            help="Settlement status",
        )
        sub.add_argument("--date", type=str, help="When the bet happened (ISO-8601)")

    add = subparsers.add_parser("add", help="Record a new bet")
    add_bet_arguments(add)

    edit = subparsers.add_parser("edit", help="Edit an existing bet")
    edit.add_argument("bet_id", type=str, help="Bet id")
    add_bet_arguments(edit)

    delete = subparsers.add_parser("delete", help="Delete a bet")
    delete.add_argument("bet_id", type=str, help="Bet id")
    delete.add_argument(
        "--soft",
        action="store_true",
        help="Mark the bet as deleted instead of removing it",
    )

    deposit = subparsers.add_parser("deposit", help="Deposit funds")
    deposit.add_argument("amount", type=float)

    withdraw = subparsers.add_parser("withdraw", help="Withdraw funds")
    withdraw.add_argument("amount", type=float)

    username = subparsers.add_parser("username", help="Set the account username")
    username.add_argument("name", type=str)

    summary = subparsers.add_parser("summary", help="Print the dashboard")
    summary.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=settings.ledger.default_period,
        help="Period for the filtered statistics",
    )

    return parser


if __name__ == "__main__":
    arguments = build_parser().parse_args()
    sys.exit(asyncio.run(run(arguments)))

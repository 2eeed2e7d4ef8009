import argparse
import json
import logging
import sys
from pathlib import Path

from src.app_shell.config import (
    ConfigurationError,
    resolve_db_path,
    resolve_migrations_dir,
    validate_ops_rules,
)
from src.app_shell.context import LedgerContext
from src.rules.loader import load_rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_context(rules_path: Path) -> LedgerContext:
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    rules = load_rules(rules_path)
    base_dir = rules_path.resolve().parent
    try:
        validate_ops_rules(rules, base_dir)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    return LedgerContext.create(
        str(resolve_db_path(rules)), rules, resolve_migrations_dir(rules, base_dir)
    )


def handle_mint(ctx: LedgerContext, args: argparse.Namespace) -> None:
    try:
        balance = ctx.settlement.mint(args.account, args.amount)
    except (ValueError, OverflowError) as e:
        logger.error(f"Cannot mint {args.amount} to {args.account}: {e}")
        sys.exit(1)
    print(f"Minted {args.amount} to {args.account}; balance {balance}.")


def handle_balance(ctx: LedgerContext, args: argparse.Namespace) -> None:
    print(ctx.settlement.balance_of(args.account))


def handle_royalties(ctx: LedgerContext, args: argparse.Namespace) -> None:
    print(ctx.service.get_royalty_balance(args.creator))


def handle_content(ctx: LedgerContext, args: argparse.Namespace) -> None:
    item = ctx.service.get_content_details(args.content_id)
    if item is None:
        print("null")
        return
    print(json.dumps(item.model_dump()))


def handle_advance(ctx: LedgerContext, args: argparse.Namespace) -> None:
    try:
        height = ctx.clock.advance(args.blocks)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    print(f"Block height {height}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content ledger CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # mint
    mint_parser = subparsers.add_parser("mint", help="Fund a settlement account (dev)")
    mint_parser.add_argument("account")
    mint_parser.add_argument("amount", type=int)

    # balance
    balance_parser = subparsers.add_parser("balance", help="Show a settlement account balance")
    balance_parser.add_argument("account")

    # royalties
    royalties_parser = subparsers.add_parser("royalties", help="Show a creator's accrued royalties")
    royalties_parser.add_argument("creator")

    # content
    content_parser = subparsers.add_parser("content", help="Show a content record")
    content_parser.add_argument("content_id", type=int)

    # advance
    advance_parser = subparsers.add_parser("advance", help="Advance the local block height")
    advance_parser.add_argument("--blocks", type=int, default=1)

    return parser


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    ctx = get_context(Path(args.rules))
    try:
        if args.command == "migrate":
            # Context creation already applied pending migrations.
            print("All migrations applied.")
        elif args.command == "mint":
            handle_mint(ctx, args)
        elif args.command == "balance":
            handle_balance(ctx, args)
        elif args.command == "royalties":
            handle_royalties(ctx, args)
        elif args.command == "content":
            handle_content(ctx, args)
        elif args.command == "advance":
            handle_advance(ctx, args)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()

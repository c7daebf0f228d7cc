"""
Cardlab CLI - Command-line interface for card data.

Usage:
    cardlab strength [FILE ...] [--top N] [--json]   Score Pokemon cards
    cardlab validate [FILE ...]                      Check card files

Without FILE arguments the JSON files in CARDLAB_DATA_DIR are used.
"""

import argparse
import json
import sys
from collections import Counter

from .balance import BalanceCategory, calculate_strength
from .config import get_settings
from .importer import load_card_files
from .logging_config import setup_logging


def main(argv=None):
    """Main CLI entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Cardlab - Trading card rule data and balance scores",
        prog="cardlab",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default from CARDLAB_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Strength command
    strength_parser = subparsers.add_parser("strength", help="Score Pokemon cards")
    strength_parser.add_argument("files", nargs="*", help="Card files")
    strength_parser.add_argument(
        "--top", type=int, default=settings.report_top, help="Strongest/weakest cards to list"
    )
    strength_parser.add_argument("--json", action="store_true", help="Print results as JSON")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate card files")
    validate_parser.add_argument("files", nargs="*", help="Card files")

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, log_file=settings.log_file)

    if args.command == "strength":
        cmd_strength(args)
    elif args.command == "validate":
        cmd_validate(args)
    else:
        parser.print_help()
        sys.exit(1)


def _resolve_files(args):
    files = args.files or get_settings().card_files()
    if not files:
        print("Error: No card files given and CARDLAB_DATA_DIR has none")
        sys.exit(1)
    return files


def cmd_strength(args):
    """Score every Pokemon card with HP and print a report."""
    result = load_card_files(_resolve_files(args))
    scored = [
        (card, calculate_strength(card))
        for card in result.cards
        if card.is_pokemon_card() and card.hp
    ]
    scored.sort(key=lambda item: item[1].total_strength, reverse=True)

    if args.json:
        payload = [
            {"cardId": card.card_id, "name": card.name, **strength.to_data()}
            for card, strength in scored
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    print(f"Cards loaded: {len(result.cards)}")
    print(f"Cards scored: {len(scored)}")
    if result.errors:
        print(f"Cards skipped: {len(result.errors)}")
    if not scored:
        return

    counts = Counter(strength.balance_category for _, strength in scored)
    print("\nBalance categories:")
    for category in BalanceCategory:
        count = counts.get(category, 0)
        share = count / len(scored) * 100
        print(f"  {category.value:<11} {count:>4} ({share:.1f}%)")

    def average(attribute):
        return sum(getattr(strength.breakdown, attribute) for _, strength in scored) / len(scored)

    total = sum(strength.total_strength for _, strength in scored) / len(scored)
    print("\nAverages:")
    print(f"  total    {total:.2f}")
    print(f"  hp       {average('hp_strength'):.2f}")
    print(f"  attack   {average('attack_strength'):.2f}")
    print(f"  ability  {average('ability_strength'):.2f}")

    top = max(args.top, 0)
    if top:
        print(f"\nStrongest {min(top, len(scored))}:")
        for card, strength in scored[:top]:
            print(f"  {strength.total_strength:6.2f}  {card.name} ({card.card_id})")
        print(f"\nWeakest {min(top, len(scored))}:")
        for card, strength in reversed(scored[-top:]):
            print(f"  {strength.total_strength:6.2f}  {card.name} ({card.card_id})")


def cmd_validate(args):
    """Import card files and report every invalid card."""
    result = load_card_files(_resolve_files(args))

    print(f"Valid cards: {len(result.cards)}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")

    if result.errors:
        print("\nErrors:")
        for e in result.errors:
            print(f"  - {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

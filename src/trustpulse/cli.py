"""Command-line interface for TrustPulse."""

import argparse
import json
import logging
import subprocess
import sys

from .app import TrustPulseApp
from .core.config import settings
from .core.constants import DisplayConstants, FileConstants
from .core.models import QueryKind
from .core.shaping import bucket_by_style, label_price_points
from .services.chat import PulseChat
from .services.directory import fetch_local_services
from .services.influencers import COLLAB_TARGETS, find_collab_matches, search_influencers
from .ui import run_streamlit_app
from .utils.data_prep import export_to_json, prepare_export

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT,
    )


def _print_product(insight):
    print(f"\n{insight.name} [{insight.category}]")
    print(f"Pulse Score: {insight.brand_score}%")
    if insight.description:
        print(f'"{insight.description}"')

    if insight.price_comparison:
        print("\nPrices:")
        for price, best in label_price_points(insight.price_comparison):
            stock = "in stock" if price.availability else "out of stock"
            print(f"  {price.store}: {price.price} ({stock}){'  <- best value' if best else ''}")

    stats = insight.sentiment
    print(f"\nSentiment: +{stats.positive:.0f}% / ~{stats.neutral:.0f}% / -{stats.negative:.0f}% "
          f"(avg {stats.average_rating:.1f}/5)")

    for bucket, items in bucket_by_style(insight.similar_products).items():
        if items:
            print(f"\n{bucket}: " + ", ".join(item.name for item in items))

    if insight.top_relevant_reviews:
        print("\nTop reviews:")
        for review in insight.top_relevant_reviews[:5]:
            print(f"  [{review.source.value}] {review.user} ({review.score}/5): {review.text[:120]}")


def _print_brand(insight):
    print(f"\n{insight.brand_name} [{insight.industry}]")
    print(f"Market Trust Score: {insight.market_trust_score}%")
    if insight.description:
        print(insight.description)
    for item in insight.product_catalog:
        print(f"  {item.name} ({item.category}): pulse {item.trust_pulse}")


def cmd_search(args):
    """Search command: classify, fetch and print one insight."""
    app = TrustPulseApp()
    result = app.search(args.query)
    state = app.state

    if state.product_insight is not None:
        _print_product(state.product_insight)
        kind = QueryKind.PRODUCT
    elif state.brand_insight is not None:
        _print_brand(state.brand_insight)
        kind = QueryKind.BRAND
    else:
        kind = None
        print(f"No insight found for '{args.query}'. Try a more specific product or brand name.")

    if args.out:
        export_to_json(prepare_export(args.query, kind, result), args.out)
        print(f"Results exported to {args.out}")


def cmd_directory(args):
    """Directory command: filter seeded listings or look up live ones."""
    if args.live:
        listings = fetch_local_services(args.live)
    else:
        listings = TrustPulseApp().directory(args.term, args.category)

    if not listings:
        print("No businesses match.")
        return
    for biz in listings:
        badge = " (verified)" if biz.is_verified else ""
        print(f"{biz.business_name}{badge} - {biz.category}, {biz.location} - {biz.rating:.1f}")
        print(f"  {biz.description}")


def cmd_influencers(args):
    profiles = search_influencers(args.query)
    if not profiles:
        print("No influencers found.")
    for p in profiles:
        print(f"{p.name} {p.handle} - {p.category}, trust {p.trust_score}, {p.followers} followers")


def cmd_collab(args):
    matches = find_collab_matches(args.query, args.target)
    if not matches:
        print("No collaboration matches found.")
    for m in matches:
        print(f"{m.name} ({m.category}) - reach {m.reach}, pulse match {m.matched_pulse} - {m.email}")


def cmd_chat(args):
    """Interactive chat with the TrustPulse assistant."""
    chat = PulseChat()
    print(chat.transcript[0][1])
    while True:
        try:
            message = input("> ").strip()
        except EOFError:
            break
        if message.lower() in ("exit", "quit"):
            break
        if message:
            print(chat.send(message))


def cmd_export(args):
    """Export command."""
    try:
        with open(args.input_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if args.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            output_file = args.output or args.input_file.replace('.json', '_export.json')
            export_to_json(data, output_file)
            print(f"Exported to {output_file}")

    except FileNotFoundError:
        print(f"Input file {args.input_file} not found")
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in input file: {e}")


def cmd_ui(args):
    """UI command."""
    print("Launching TrustPulse UI...")
    try:
        run_streamlit_app()
    except subprocess.CalledProcessError as e:
        print(f"Failed to launch UI: {e}")
    except KeyboardInterrupt:
        print("\nUI stopped by user")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TrustPulse - AI product and brand trust insights")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    search_parser = subparsers.add_parser('search', help='Search a product or brand')
    search_parser.add_argument('query', help='Product or brand name')
    search_parser.add_argument('--out', help='Output JSON file')

    directory_parser = subparsers.add_parser('directory', help='Browse the business directory')
    directory_parser.add_argument('--term', default='', help='Search term for name or description')
    directory_parser.add_argument('--category', default=DisplayConstants.ALL_CATEGORIES,
                                  choices=DisplayConstants.DIRECTORY_CATEGORIES, help='Category filter')
    directory_parser.add_argument('--live', metavar='QUERY', help='Look up local businesses with the model instead')

    influencer_parser = subparsers.add_parser('influencers', help='Find influencers for a category')
    influencer_parser.add_argument('query', help='Category')

    collab_parser = subparsers.add_parser('collab', help='Find collaboration matches')
    collab_parser.add_argument('query', help='Brand, niche or creator')
    collab_parser.add_argument('--target', default='influencers', choices=COLLAB_TARGETS, help='What to match with')

    subparsers.add_parser('chat', help='Chat with TrustPulse AI')

    export_parser = subparsers.add_parser('export', help='Re-export a saved search')
    export_parser.add_argument('--in', dest='input_file', required=True, help='Input JSON file')
    export_parser.add_argument('--out', dest='output', help='Output file (optional)')
    export_parser.add_argument('--pretty', action='store_true', help='Pretty print to stdout')

    subparsers.add_parser('ui', help='Launch web UI')
    return parser


COMMANDS = {
    'search': cmd_search,
    'directory': cmd_directory,
    'influencers': cmd_influencers,
    'collab': cmd_collab,
    'chat': cmd_chat,
    'export': cmd_export,
    'ui': cmd_ui,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

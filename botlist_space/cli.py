"""CLI commands for botlist.space."""

import argparse


async def _run(client, args):
    if args.command == "stats":
        return await client.fetch_stats(raw=True)
    if args.command == "bots":
        return await client.fetch_bots(raw=True, page=args.page)
    if args.command == "bot":
        return await client.fetch_bot(args.id, raw=True)
    if args.command == "upvotes":
        return await client.fetch_upvotes(args.id, raw=True, page=args.page)
    if args.command == "user":
        return await client.fetch_user(args.id, raw=True)
    if args.command == "user-bots":
        return await client.fetch_bots_of_user(args.id, raw=True, page=args.page)
    if args.command == "post-count":
        counts = args.count if args.shards or len(args.count) > 1 else args.count[0]
        return await client.post_count(args.id, counts)
    raise ValueError(f"Unknown command: {args.command}")


def main():
    parser = argparse.ArgumentParser(
        description="Query botlist.space and post server counts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--token",
        default=None,
        help="API token (default: $BOTLIST_TOKEN)",
    )
    parser.add_argument(
        "--bot-token",
        default=None,
        help="Bot token for upvotes and posting (default: $BOTLIST_BOT_TOKEN, then --token)",
    )
    parser.add_argument(
        "--bot-id",
        default=None,
        help="Default bot ID (default: $BOTLIST_BOT_ID)",
    )
    parser.add_argument(
        "--api-version",
        type=int,
        default=None,
        help="API version (default: $BOTLIST_VERSION or 1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every request",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("stats", help="Fetch site statistics")

    bots_parser = subparsers.add_parser("bots", help="Fetch a page of listed bots")
    bots_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    bot_parser = subparsers.add_parser("bot", help="Fetch a single bot")
    bot_parser.add_argument("id", nargs="?", default=None, help="Bot ID (default: --bot-id)")

    upvotes_parser = subparsers.add_parser("upvotes", help="Fetch a bot's upvotes (needs a bot token)")
    upvotes_parser.add_argument("id", nargs="?", default=None, help="Bot ID (default: --bot-id)")
    upvotes_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    user_parser = subparsers.add_parser("user", help="Fetch a user")
    user_parser.add_argument("id", help="User ID")

    user_bots_parser = subparsers.add_parser("user-bots", help="Fetch the bots a user owns")
    user_bots_parser.add_argument("id", help="User ID")
    user_bots_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    post_parser = subparsers.add_parser(
        "post-count",
        help="Post a server count, or one count per shard",
    )
    post_parser.add_argument("count", type=int, nargs="+", help="Server count, or one count per shard")
    post_parser.add_argument("--id", default=None, help="Bot ID (default: --bot-id)")
    post_parser.add_argument(
        "--shards",
        action="store_true",
        help="Send counts as shards even when only one is given",
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    import asyncio
    import json
    import logging
    import sys

    import httpx

    from .client import Client
    from .errors import BotlistError
    from .settings import get_settings

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    settings = get_settings()
    options = {
        "token": args.token or settings.token,
        "bot_token": args.bot_token or settings.bot_token,
        "user_token": settings.user_token,
        "bot_id": args.bot_id or settings.bot_id,
        "version": args.api_version or settings.version,
        "log": args.verbose,
    }

    async def run():
        async with Client(options) as client:
            return await _run(client, args)

    try:
        result = asyncio.run(run())
    except (BotlistError, httpx.HTTPError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()

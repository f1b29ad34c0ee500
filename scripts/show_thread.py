#!/usr/bin/env python3
"""Browse the comments of a Bluesky thread in the terminal.

Usage:
    python scripts/show_thread.py at://did:plc:xyz/app.bsky.feed.post/3kabc

Commands:
    search <term>   filter comments (empty term clears the search)
    sort <mode>     newest, oldest, likes, reposts, quotes, replies
    more            reveal the next page
    reload          fetch the thread again
    quit            exit
"""

import asyncio
import html
import re
import sys

from skythread.application.viewer import ThreadViewer, ViewerSnapshot
from skythread.config import Settings
from skythread.domain.value import SortMode
from skythread.util.di.container import create_cli_container
from skythread.util.logging import get_logger, setup_logging
from skythread.util.observability import configure_logfire

logger = get_logger(__name__)

_TAG = re.compile(r"<[^>]+>")


def _plain(markup: str) -> str:
    """Markup to terminal text."""
    return html.unescape(_TAG.sub("", markup.replace("<br>", "\n")))


def print_snapshot(snapshot: ViewerSnapshot) -> None:
    if snapshot.error:
        print(snapshot.error)
        return

    if snapshot.stats is not None:
        if snapshot.stats.items:
            print(
                " | ".join(
                    f"{item.count_display} {item.label}" for item in snapshot.stats.items
                )
            )
        else:
            print(snapshot.stats.message)
        print(f"Reply on Bluesky: {snapshot.stats.join_url or '-'}")

    print(f"[sort: {snapshot.sort_mode.value}] [search: {snapshot.search_term or '-'}]")
    print()

    for comment in snapshot.comments:
        indent = "  " * (comment.depth - 1)
        if comment.notice:
            print(f"{indent}[{comment.notice}]")
            continue
        author = comment.author
        print(f"{indent}{_plain(author.display_name)} @{_plain(author.handle)}  {comment.timestamp}")
        for line in _plain(comment.body_html).splitlines() or [""]:
            print(f"{indent}  {line}")
        counters = comment.counters
        print(
            f"{indent}  likes {counters.likes_display}  reposts {counters.reposts_display}"
            f"  replies {counters.replies_display}"
        )

    if snapshot.empty_message:
        print(snapshot.empty_message)
    if snapshot.has_more:
        print(f"-- {snapshot.total - len(snapshot.comments)} more, 'more' shows {snapshot.next_batch_size} --")


async def run(uri: str) -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings, stream=sys.stderr)

    container = create_cli_container()
    try:
        async with container() as request_container:
            viewer = await request_container.get(ThreadViewer)
            await viewer.load(uri)
            print_snapshot(viewer.view())

            while True:
                try:
                    line = input("> ").strip()
                except EOFError:
                    break
                command, _, argument = line.partition(" ")

                if command == "quit":
                    break
                elif command == "search":
                    viewer.search(argument)
                elif command == "sort":
                    try:
                        viewer.sort(SortMode(argument.strip()))
                    except ValueError:
                        print(f"Unknown sort mode: {argument}")
                        continue
                elif command == "more":
                    viewer.reveal_more()
                elif command == "reload":
                    await viewer.reload()
                elif command:
                    print(f"Unknown command: {command}")
                    continue
                print_snapshot(viewer.view())
    finally:
        await container.close()

    logger.info("Viewer closed")
    return 0


def main() -> int:
    if len(sys.argv) != 2:
        print(__doc__)
        return 2
    return asyncio.run(run(sys.argv[1]))


if __name__ == "__main__":
    sys.exit(main())

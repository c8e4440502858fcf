"""
Mount a PostDisplay against the relay API and print what it renders.

Example:
    python backend/scripts/show_post.py --post-id 3
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root (backend/) is on sys.path so that `post_relay` can be imported when running as a script
sys.path.append(str(Path(__file__).resolve().parents[1]))

from post_relay.settings import settings
from post_relay.views.post_display import PostDisplay


async def show(api_base: str, post_id: int, wait: float) -> str:
    view = PostDisplay(api_base_url=api_base, post_id=post_id)
    view.mount()
    try:
        await asyncio.wait_for(view.settled(), timeout=wait)
    except asyncio.TimeoutError:
        pass
    try:
        return view.render()
    finally:
        await view.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch a post through the relay API and print the rendered view.")
    parser.add_argument("--api-base", default=settings.display_api_base, help="Relay API base URL")
    parser.add_argument("--post-id", type=int, default=1)
    parser.add_argument("--wait", type=float, default=10.0, help="Seconds to wait before printing (still loading after that)")
    args = parser.parse_args()

    print(asyncio.run(show(args.api_base, args.post_id, args.wait)))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Ad hoc menu analysis from the command line.

Run one analysis without starting the web server.

Usage:
    python query.py --image menus/bistro.jpg
    python query.py --image menus/bistro.jpg --dietary vegetarian --budget 20 --mood spicy
    python query.py --debug --image menus/bistro.jpg  # Show full JSON response
"""

import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from src.api.presentation import build_cards
from src.media.image_encoder import detect_mime_type, read_image_file
from src.models.models import AnalysisResult, Preferences
from src.services.errors import MenuAnalysisError
from src.services.menu_analyzer import analyze_menu
from src.utils.logger import logger

console = Console()

# Used only when the file's magic bytes are not recognised
MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

USAGE = 'Usage: python query.py [--debug] --image PATH [--dietary TEXT] [--budget N] [--mood TEXT]'


def print_result(result: AnalysisResult) -> None:
    """Render recommendations as rich panels, one per dish."""
    console.print("[bold]🎯 Your Perfect Picks[/bold]")
    for card in build_cards(result):
        body = escape(card.reasoning)
        if card.warning:
            body += f"\n\n[yellow]⚠️ Note:[/yellow] {escape(card.warning)}"
        body += f"\n\nValue Score: {card.stars} {card.value_score}/10"
        console.print(Panel(body, title=f"[bold]{escape(card.dish)}[/bold]  ${escape(card.price)}", title_align="left"))


async def run_query(image_path: str, preferences: Preferences) -> AnalysisResult:
    image_bytes = await read_image_file(image_path)
    fallback = MIME_TYPES.get(Path(image_path).suffix.lower(), "image/jpeg")
    mime_type = detect_mime_type(image_bytes, fallback=fallback)
    logger.info(f"Loaded image: {Path(image_path).name} ({len(image_bytes) / 1024:.1f} KB, {mime_type})")
    return await analyze_menu(image_bytes, mime_type, preferences)


def parse_args(argv: list[str]) -> tuple[bool, str, dict[str, str]]:
    """Parse flags into (debug, image_path, preference fields). Exits on bad input."""
    debug = False
    image_path = None
    fields = {"dietary": "", "budget": "", "mood": ""}

    i = 0
    while i < len(argv):
        flag = argv[i]
        if flag == "--debug":
            debug = True
            i += 1
        elif flag in ("--image", "--dietary", "--budget", "--mood"):
            if i + 1 >= len(argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            if flag == "--image":
                image_path = argv[i + 1]
            else:
                fields[flag[2:]] = argv[i + 1]
            i += 2
        else:
            print(f"Unknown flag: {flag}")
            print(USAGE)
            sys.exit(1)

    if not image_path:
        print("Error: --image is required")
        print(USAGE)
        sys.exit(1)

    return debug, image_path, fields


def main(argv: list[str]) -> None:
    debug, image_path, fields = parse_args(argv)

    try:
        result = asyncio.run(run_query(image_path, Preferences(**fields)))
    except MenuAnalysisError as e:
        console.print(f"[red]⚠️ Error: {e.message}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        sys.exit(0)

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print_json(data=result.model_dump(by_alias=True))
        console.print()
    print_result(result)


if __name__ == "__main__":
    main(sys.argv[1:])

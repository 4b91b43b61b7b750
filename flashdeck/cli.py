"""Command-line front end for FlashDeck."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import CARD_PALETTE, Config, LANGUAGES, SettingsManager, is_light_color, language_label
from .exceptions import (
    FlashdeckError,
    InputTooLongError,
    NetworkError,
    ProviderError,
    RateLimitedError,
    StorageError,
    ValidationError,
)
from .models import Flashcard
from .services import FlashcardLibrary
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="flashdeck", description="Personal flashcard manager")
    p.add_argument("--settings", default=None, help="Settings JSON file")
    p.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    sub = p.add_subparsers(dest="command", required=True)

    folders = sub.add_parser("folders", help="Manage folders")
    folder_sub = folders.add_subparsers(dest="action", required=True)
    folder_sub.add_parser("list", help="List folders")
    create = folder_sub.add_parser("create", help="Create a folder")
    create.add_argument("name")
    rename = folder_sub.add_parser("rename", help="Rename a folder")
    rename.add_argument("folder_id")
    rename.add_argument("name")
    delete = folder_sub.add_parser("delete", help="Delete a folder, moving its cards to 'No Folder'")
    delete.add_argument("folder_id")

    cards = sub.add_parser("cards", help="Manage cards")
    card_sub = cards.add_subparsers(dest="action", required=True)
    list_cards = card_sub.add_parser("list", help="List cards of a folder (default: no folder)")
    list_cards.add_argument("--folder", default=None, help="Folder id")
    list_cards.add_argument("--all", action="store_true", help="List every card")
    add = card_sub.add_parser("add", help="Add a card")
    add.add_argument("front")
    add.add_argument("back")
    add.add_argument("--folder", default=None, help="Folder id")
    add.add_argument("--front-lang", default=Config.DEFAULT_FRONT_LANG)
    add.add_argument("--back-lang", default=Config.DEFAULT_BACK_LANG)
    add.add_argument("--front-color", default=Config.DEFAULT_FRONT_COLOR)
    add.add_argument("--back-color", default=Config.DEFAULT_BACK_COLOR)
    remove = card_sub.add_parser("delete", help="Delete a card")
    remove.add_argument("card_id", type=int)
    card_sub.add_parser("clear", help="Delete all cards")

    translate = sub.add_parser("translate", help="Translate text")
    translate.add_argument("text")
    translate.add_argument("--from", dest="from_lang", default=Config.DEFAULT_FRONT_LANG)
    translate.add_argument("--to", dest="to_lang", default=Config.DEFAULT_BACK_LANG)
    translate.add_argument("--save", action="store_true", help="Save the result as a card")
    translate.add_argument("--folder", default=None, help="Folder for the saved card")

    sub.add_parser("languages", help="List supported languages")
    sub.add_parser("colors", help="List the card color palette")
    return p


def format_card(card: Flashcard) -> str:
    folder = card.folder_id or "-"
    return (
        f"{card.id}  [{card.front_lang}] {card.front_text}  |  "
        f"[{card.back_lang}] {card.back_text}  (folder: {folder})"
    )


def _folders(library: FlashcardLibrary, args: argparse.Namespace) -> None:
    if args.action == "list":
        counts = library.cards.count_by_folder()
        for folder in library.folders.list_all():
            print(f"{folder.id}  {folder.name}  ({counts.get(folder.id, 0)} cards)")
        print(f"-  No Folder  ({counts.get(None, 0)} cards)")
    elif args.action == "create":
        folder = library.folders.create(args.name)
        print(f"Created folder {folder.id}: {folder.name}")
    elif args.action == "rename":
        folder = library.folders.rename(args.folder_id, args.name)
        if folder is not None:
            print(f"Renamed folder {folder.id}: {folder.name}")
        elif not args.name.strip():
            print("Rename cancelled: folder name is blank")
        else:
            print(f"No folder with id {args.folder_id}")
    elif args.action == "delete":
        library.delete_folder(args.folder_id)
        print(f"Deleted folder {args.folder_id}")


def _cards(library: FlashcardLibrary, args: argparse.Namespace) -> None:
    if args.action == "list":
        cards = library.cards.list_all() if args.all else library.cards.filter_by_folder(args.folder)
        for card in cards:
            print(format_card(card))
        if not cards:
            print("No cards yet")
    elif args.action == "add":
        card = library.add_card(
            args.front,
            args.back,
            front_color=args.front_color,
            back_color=args.back_color,
            front_lang=args.front_lang,
            back_lang=args.back_lang,
            folder_id=args.folder,
        )
        print(format_card(card))
    elif args.action == "delete":
        library.cards.delete_by_id(args.card_id)
    elif args.action == "clear":
        library.cards.delete_all()
        print("Deleted all cards")


async def _translate(library: FlashcardLibrary, args: argparse.Namespace) -> None:
    result = await library.translator.translate(args.text, args.from_lang, args.to_lang)
    display = library.translator.post_process(result.translated_text)
    print(display.label)
    if args.save:
        card = library.save_translation(result, display, folder_id=args.folder)
        print(f"Card added successfully! ({card.id})")


def error_message(error: FlashdeckError) -> str:
    """User-facing message for each error class."""
    if isinstance(error, (ValidationError, InputTooLongError, RateLimitedError)):
        return str(error)
    if isinstance(error, NetworkError):
        return "Could not reach the translation service. Please try again."
    if isinstance(error, ProviderError):
        return f"Translation failed: {error}"
    if isinstance(error, StorageError):
        return f"Storage error: {error}"
    return str(error)


async def run(args: argparse.Namespace) -> int:
    settings = SettingsManager(args.settings)
    setup_logger(args.log_level or settings.get("LOG_LEVEL", Config.LOG_LEVEL), Config.LOG_FILE or None)

    if args.command == "languages":
        for tag in LANGUAGES:
            print(f"{tag}  {language_label(tag)}")
        return 0

    if args.command == "colors":
        for color in CARD_PALETTE:
            print(f"{color}  {'light' if is_light_color(color) else 'dark'}")
        return 0

    async with FlashcardLibrary.from_settings(settings) as library:
        try:
            if args.command == "folders":
                _folders(library, args)
            elif args.command == "cards":
                _cards(library, args)
            elif args.command == "translate":
                await _translate(library, args)
        except FlashdeckError as e:
            logger.debug("Command %s failed", args.command, exc_info=True)
            print(f"Error: {error_message(e)}", file=sys.stderr)
            return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\n[!] Aborted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())

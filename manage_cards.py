"""
FlashDeck: Personal Flashcard Manager
-------------------------------------

Command-line entry point for managing cards, folders and translations.
"""

import sys

from flashdeck.cli import main


if __name__ == "__main__":
    sys.exit(main())

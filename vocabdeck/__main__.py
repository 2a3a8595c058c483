"""Entry point for running VocabDeck via `python -m vocabdeck`."""

from vocabdeck.cli import cli

if __name__ == "__main__":
    cli()

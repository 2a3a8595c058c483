import click

from vocabdeck import __version__


@click.group()
@click.version_option(version=__version__, prog_name="vocabdeck")
def cli():
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind. Defaults to VOCABDECK_SERVER.HOST.")
@click.option("--port", default=None, type=int, help="Port to bind. Defaults to VOCABDECK_SERVER.PORT.")
@click.option(
    "--data-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory for users.json and per-account documents. Defaults to VOCABDECK_DIR_PATHS.DATA_DIR.",
)
def serve(host, port, data_dir):
    """Run the VocabDeck API server."""
    from vocabdeck.core import CoreSettings
    from vocabdeck.services import VocabDeckService

    overrides = {"VOCABDECK_DIR_PATHS": {"DATA_DIR": data_dir}} if data_dir else {}
    service = VocabDeckService(settings=CoreSettings(**overrides))
    server = service.settings.VOCABDECK_SERVER
    click.echo(f"Starting VocabDeck at http://{host or server.HOST}:{port or server.PORT} ...")
    click.echo("Press Ctrl+C to stop.")
    service.run(host=host, port=port)


if __name__ == "__main__":
    cli()

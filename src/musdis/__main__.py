from musdis.cli import cli

cli()

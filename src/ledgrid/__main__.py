from ledgrid.cli import cli

cli()

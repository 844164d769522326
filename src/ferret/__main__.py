from ferret.cli import cli

cli()

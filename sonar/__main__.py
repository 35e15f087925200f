from sonar.cli import cli

cli()

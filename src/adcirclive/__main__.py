from adcirclive.main import cli

cli()

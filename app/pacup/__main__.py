"""Allow ``python -m pacup``."""

from pacup.cli.main import app

app()

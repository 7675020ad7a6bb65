"""python -m pomscout"""

from .cli import app

app()

"""Allow ``python -m sdrg``."""
from .main import run

run()

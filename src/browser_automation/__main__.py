"""Allow ``python -m browser_automation``."""

from .server import main

main()

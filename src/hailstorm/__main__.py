"""Allow ``python -m hailstorm``."""
from .cli import main

raise SystemExit(main())

"""Allow ``python -m jdcov``."""

from jdcov.cli import main

main()

"""Allow ``python -m piped_args``."""

from piped_args.cli import main

main()

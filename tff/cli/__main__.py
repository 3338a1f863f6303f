"""Allow ``python -m tff.cli`` execution."""

from tff.cli.main import main

main()

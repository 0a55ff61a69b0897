"""Entry point for ``python -m dummy_skills``."""

from dummy_skills.cli import main

main()

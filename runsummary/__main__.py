"""Allow ``python -m runsummary``."""

from runsummary.cli import main

if __name__ == "__main__":
    main()

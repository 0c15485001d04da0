"""Allow running urltrace as ``python -m urltrace``."""

from urltrace.cli.main import main


if __name__ == "__main__":
    main()

"""Enable running as: python -m cadence

Usage:
    python -m cadence --help
    python -m cadence next --weekday wed --time 13:00
    python -m cadence run --every-hours 1
"""

from cadence.cli.main import cli

if __name__ == "__main__":
    cli()

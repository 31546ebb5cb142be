"""Allow running the CLI with ``python -m akamai_netlist``."""

import sys

from akamai_netlist.cli import main

if __name__ == "__main__":
    sys.exit(main())

import sys

from casper_mcp.cli import main

sys.exit(main())

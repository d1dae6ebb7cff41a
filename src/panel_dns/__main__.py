import sys

from panel_dns.cli import main

sys.exit(main())

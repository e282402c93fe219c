import sys

from xlsx2sql.cli import main

sys.exit(main())

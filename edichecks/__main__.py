import sys

from edichecks.cli import main

sys.exit(main())

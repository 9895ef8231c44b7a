import sys

from projectforge.cli import main

sys.exit(main())

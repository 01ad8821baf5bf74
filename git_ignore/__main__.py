import sys

from git_ignore.cli import main

sys.exit(main())

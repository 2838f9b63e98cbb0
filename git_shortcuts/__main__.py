import sys

from git_shortcuts.cli.main import main

sys.exit(main())

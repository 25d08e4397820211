import sys

from .notifier import main

sys.exit(main())

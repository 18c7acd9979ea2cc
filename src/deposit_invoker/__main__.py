import sys

from deposit_invoker.cli import main

sys.exit(main())

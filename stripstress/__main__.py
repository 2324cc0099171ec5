import sys

from stripstress.app import main

sys.exit(main())

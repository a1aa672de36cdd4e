import sys

from kirimase.cli import main

sys.exit(main())

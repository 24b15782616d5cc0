# sight/__main__.py
import sys

from sight.app import main

sys.exit(main())

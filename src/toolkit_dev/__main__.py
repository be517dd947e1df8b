# src/toolkit_dev/__main__.py
import sys

from toolkit_dev.cli import main

sys.exit(main())

"""Put the repository root on ``sys.path`` so ``roster_bot`` imports uninstalled."""

import os
import sys

# Mirrors running ``python -m pytest`` from the repository root, where the
# working directory is automatically importable.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

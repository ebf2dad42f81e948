import os
import sys
from pathlib import Path

# Run Qt in headless environments
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# Keep test runs from writing log files into the working tree
os.environ.setdefault("TODO_HIGHLIGHT_LOG_FILE", os.devnull)

PROJECT_ROOT = Path(__file__).resolve().parent

# Ensure project root is first so `import src.*` resolves correctly
proj = str(PROJECT_ROOT)
if proj not in sys.path:
    sys.path.insert(0, proj)

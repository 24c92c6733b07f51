"""
Shared test setup.
"""

import os

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QStandardPaths  # noqa: E402

# Keep log files and configuration out of the real user directories
QStandardPaths.setTestModeEnabled(True)

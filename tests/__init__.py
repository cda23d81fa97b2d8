"""
Test suite for the pagequill project.

Unit tests live next to the package they cover (model, engine, parsers,
renderers); CLI tests sit at the top level.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

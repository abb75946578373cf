import sys
import os

# Project root for top-level modules ('cli', 'errors', 'correlate', 'status', ...) and this
# directory for shared test helpers such as fake_github.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
HERE = os.path.dirname(os.path.abspath(__file__))
for path in (HERE, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

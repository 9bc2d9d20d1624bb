import os
import sys

# In-memory sqlite for every test run; must be set before db.init is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

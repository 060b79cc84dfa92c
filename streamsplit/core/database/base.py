# File: streamsplit/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Ledger models (runs, job records) inherit from this.
Base = declarative_base()

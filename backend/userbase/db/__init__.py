"""Database metadata - SQLAlchemy Base shared by models and migrations."""

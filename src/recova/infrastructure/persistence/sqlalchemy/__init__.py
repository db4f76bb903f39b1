"""SQLAlchemy persistence implementation."""

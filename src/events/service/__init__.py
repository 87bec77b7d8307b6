"""Registration services."""

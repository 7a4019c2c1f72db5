"""Event registration and QR check-in service."""

"""Domain services: registration, check-in, statistics, export, QR and email."""

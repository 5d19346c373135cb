"""JPCSConnect: event registration, QR check-in and attendance analytics."""

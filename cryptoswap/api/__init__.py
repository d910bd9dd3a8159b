"""HTTP service for the crypto pool engine."""

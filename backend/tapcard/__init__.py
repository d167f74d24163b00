"""TapCard backend: NFC/QR business cards with view and connection analytics."""

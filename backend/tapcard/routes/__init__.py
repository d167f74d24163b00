"""HTTP routers; prefixes are applied in main.py."""

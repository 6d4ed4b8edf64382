"""Domain services: accounts, cases and uploads."""

"""AWS session, client and credential helpers."""

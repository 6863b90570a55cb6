"""Core models and diff algorithms, free of any UI or I/O dependency."""

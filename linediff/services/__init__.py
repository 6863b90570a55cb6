"""Settings and file I/O services used by the command line front end and workers."""

"""CWP/SU trace format."""

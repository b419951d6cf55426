"""Command line app for flagview."""

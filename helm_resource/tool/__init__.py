"""Command line tool for the check, in and out pipeline verbs."""

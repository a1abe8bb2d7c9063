"""Command line tools for the autodraw stroke compiler."""

"""CLI subcommands registered on the feedkeeper app."""

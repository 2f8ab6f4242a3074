"""Vista CLI commands - subcommand implementations."""

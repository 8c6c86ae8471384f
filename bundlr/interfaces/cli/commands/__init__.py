"""CLI command implementations (one cmd_* function per subcommand)."""

"""restdns system processes, each module is a console subcommand."""

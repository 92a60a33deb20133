"""restdns unit tests."""

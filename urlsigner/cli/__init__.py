"""Command line interface for the URL signer."""

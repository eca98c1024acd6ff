"""Command line interface for gitlab-clusters."""

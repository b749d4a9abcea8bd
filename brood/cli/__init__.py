"""Brood command line interface."""

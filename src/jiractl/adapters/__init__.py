"""Adapters for the Jira REST API and the local config store."""

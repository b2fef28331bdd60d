"""Config-service URL building and concurrent fetching."""

from apollo_env.remote.fetcher import fetch_remote_configs, merge_configurations
from apollo_env.remote.urls import build_remote_urls, check_required

__all__ = ["build_remote_urls", "check_required", "fetch_remote_configs", "merge_configurations"]

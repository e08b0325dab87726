from .client import GitHubClient
from .inputs import GitHubLocation, parse_github_url

__all__ = ["GitHubClient", "GitHubLocation", "parse_github_url"]

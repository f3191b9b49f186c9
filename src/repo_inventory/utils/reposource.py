"""Repository naming from path patterns."""

DEFAULT_BITBUCKET_CLOUD_PATTERN = "{host}/{nameWithOwner}"


def bitbucket_cloud_repo_name(repository_path_pattern: str, host: str, name_with_owner: str) -> str:
    """Build a repository name by templating a path pattern.

    Supported placeholders are ``{host}`` and ``{nameWithOwner}``. An empty
    pattern falls back to ``{host}/{nameWithOwner}``.
    """
    pattern = repository_path_pattern or DEFAULT_BITBUCKET_CLOUD_PATTERN
    return pattern.replace("{host}", host).replace("{nameWithOwner}", name_with_owner)

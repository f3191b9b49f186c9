"""Mapping of Bitbucket Cloud repositories to canonical records."""

from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

import structlog

from repo_inventory.bitbucketcloud.models import SERVICE_TYPE, BitbucketRepo
from repo_inventory.core.models.connection import BitbucketCloudConnection, GitURLType
from repo_inventory.core.models.repository import ExternalRepoSpec, Repo, SourceInfo
from repo_inventory.utils.reposource import bitbucket_cloud_repo_name
from repo_inventory.utils.urls import url_host

logger = structlog.get_logger(__name__)


class RepoMapper:
    """Converts provider repositories into canonical ``Repo`` records.

    ``host`` must already be normalized; the mapper never parses the
    connection URL itself.
    """

    def __init__(self, connection: BitbucketCloudConnection, host: SplitResult, urn: str) -> None:
        self._connection = connection
        self._host = host
        self._urn = urn

    @property
    def hostname(self) -> str:
        return self._host.hostname or self._host.netloc

    @property
    def service_id(self) -> str:
        return urlunsplit(self._host)

    def map(self, repo: BitbucketRepo) -> Repo:
        return Repo(
            name=bitbucket_cloud_repo_name(
                self._connection.repository_path_pattern,
                self.hostname,
                repo.full_name,
            ),
            uri=bitbucket_cloud_repo_name("", self.hostname, repo.full_name),
            description=repo.name,
            external_repo=ExternalRepoSpec(
                id=repo.uuid,
                service_type=SERVICE_TYPE,
                service_id=self.service_id,
            ),
            fork=repo.parent is not None,
            enabled=True,
            sources={
                self._urn: SourceInfo(
                    id=self._urn,
                    clone_url=self.authenticated_remote_url(repo),
                ),
            },
            metadata=repo,
        )

    def authenticated_remote_url(self, repo: BitbucketRepo) -> str:
        """Return the Git remote URL of ``repo`` for this connection.

        SSH connections get an scp-style URL without credentials. HTTPS
        connections get the advertised clone link with the username and app
        password in its userinfo, or a plain URL built from the host when
        the link is missing or malformed.
        """
        if self._connection.git_url_type == GitURLType.SSH:
            return f"git@{url_host(self.hostname)}:{repo.full_name}.git"

        fallback_url = urlunsplit(("https", self._host.netloc, f"/{repo.full_name}", "", ""))

        try:
            return _with_userinfo(
                repo.links.clone.https(),
                self._connection.username,
                self._connection.app_password,
            )
        except (LookupError, ValueError) as e:
            logger.warning(
                "Error adding authentication to Bitbucket Cloud repository Git remote URL.",
                url=[link.href for link in repo.links.clone.links],
                error=str(e),
            )
            return fallback_url


def _with_userinfo(url: str, username: str, password: str) -> str:
    """Replace the userinfo of ``url``; raises ValueError if it is malformed."""
    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.hostname:
        raise ValueError(f"malformed clone URL {url!r}")

    userinfo = f"{quote(username, safe='')}:{quote(password, safe='')}"
    netloc = f"{userinfo}@{url_host(parsed.hostname)}"
    if parsed.port is not None:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit(parsed._replace(netloc=netloc))

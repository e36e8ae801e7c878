"""
Helpers for turning Go import paths into repository identifiers.
"""

DEFAULT_HOSTING_DOMAIN = "github.com"


def is_hosted(path: str, domain: str = DEFAULT_HOSTING_DOMAIN) -> bool:
    """Whether an import path lives under the hosting domain."""
    return path == domain or path.startswith(domain + "/")


def repo_root(path: str, domain: str = DEFAULT_HOSTING_DOMAIN) -> str:
    """
    Derive the repository root of an import path.

    ``github.com/owner/repo/sub/pkg`` becomes ``github.com/owner/repo``.
    Paths outside the hosting domain are returned unchanged since there is
    no way to tell where the repository ends and the package tree begins.
    """
    if not is_hosted(path, domain):
        return path
    parts = path.split("/")
    return "/".join(parts[:3])


def owner_repo(path: str, domain: str = DEFAULT_HOSTING_DOMAIN) -> tuple[str, str]:
    """
    Split a hosted import path into its owner and repository names.

    Raises:
        ValueError: If the path is not hosted or has no repository segment
    """
    if not is_hosted(path, domain):
        raise ValueError(f"Not a {domain} path: {path}")

    parts = path.split("/")
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise ValueError(f"Cannot derive owner/repo from: {path}")
    return parts[1], parts[2]


def repo_identifier(full_name: str, domain: str = DEFAULT_HOSTING_DOMAIN) -> str:
    """Turn an ``owner/repo`` full name into an import-path style identifier."""
    return f"{domain}/{full_name}"

"""Read raw document text from a local file or a remote URL.

This module handles all I/O for the content snapshot. It knows nothing about
``$ref``: it turns an identity into text, and turns a reference plus a base
into a canonical identity.

The public functions are:

* :func:`read_source` -- Load the raw text of a file path or http(s) URL.
* :func:`canonicalize` -- Absolute, normalised identity for a path or URL.
* :func:`join_reference` -- Resolve a reference against a base document.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urljoin

import httpx

from schemer.exceptions import ContentLoadError


def is_url(source: str) -> bool:
    """Whether *source* is an http(s) URL rather than a file path."""
    return source.startswith(("http://", "https://"))


def read_source(source: str, timeout: float = 30.0) -> str:
    """Load the raw text behind *source*.

    Args:
        source: An http(s) URL or a local file path.
        timeout: Timeout in seconds for URL fetches.

    Returns:
        The document text.

    Raises:
        ContentLoadError: If the source cannot be read or fetched.
    """
    if is_url(source):
        return _load_from_url(source, timeout)
    return _load_from_file(source)


def _load_from_url(url: str, timeout: float) -> str:
    """Fetch a document over HTTP(S).

    Raises:
        ContentLoadError: On a non-2xx status or a network failure.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ContentLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ContentLoadError(f"Failed to fetch document from {url}: {exc}") from exc
    return response.text


def _load_from_file(path: str) -> str:
    """Read a document from a local file.

    Raises:
        ContentLoadError: If the file does not exist or cannot be read.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ContentLoadError(f"Document not found: {path}")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentLoadError(f"Failed to read document {path}: {exc}") from exc


def canonicalize(source: str) -> str:
    """Return the canonical identity of *source*.

    URLs are returned unchanged apart from a dropped fragment. File paths
    are made absolute with symlinks and ``..`` segments resolved, so two
    spellings of the same file share one identity.
    """
    if is_url(source):
        return source.split("#", 1)[0]
    return str(Path(source).expanduser().resolve())


def base_of(identity: str) -> str:
    """The base that relative references written in *identity* are resolved against.

    For a URL this is the URL itself (``urljoin`` drops the last segment).
    For a file it is the file's directory.
    """
    if is_url(identity):
        return identity
    return str(Path(identity).parent)


def join_reference(base: str, reference: str) -> str:
    """Resolve *reference* against *base* and canonicalise the result.

    Args:
        base: The value of :func:`base_of` for the referring document.
        reference: A ``$ref`` target without a fragment.

    Example::

        join_reference("/specs", "resources/pets.yaml")
        # '/specs/resources/pets.yaml'
        join_reference("https://x.io/api/openapi.yaml", "pets.yaml")
        # 'https://x.io/api/pets.yaml'
    """
    if is_url(reference):
        return canonicalize(reference)
    if is_url(base):
        return canonicalize(urljoin(base, reference))
    return canonicalize(os.path.join(base, reference))

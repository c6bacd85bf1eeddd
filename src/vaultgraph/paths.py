"""Path and object ID mapping for vaultgraph vaults.

Object IDs are vault-relative markdown paths without the ``.md`` suffix and
without the configured objects/pages directory roots, e.g.
``objects/people/freya.md`` -> ``people/freya``.
"""

from __future__ import annotations

import posixpath
from typing import Optional


def normalize_dir_root(root: Optional[str]) -> str:
    """Normalize a directory root to ``"name/"`` form.

    Examples:
        ``"/objects/"`` -> ``"objects/"``
        ``"objects"``   -> ``"objects/"``
        ``""``          -> ``""``
    """
    if not root:
        return ""
    root = root.replace("\\", "/").strip("/")
    if not root:
        return ""
    return root + "/"


def _normalize_rel_path(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    path = path.lstrip("/")
    while "//" in path:
        path = path.replace("//", "/")
    return path


def _strip_md(path: str) -> str:
    if path.endswith(".md"):
        return path[: -len(".md")]
    return path


def file_path_to_object_id(
    file_path: str,
    objects_root: Optional[str] = None,
    pages_root: Optional[str] = None,
) -> str:
    """Convert a vault-relative file path to an object ID.

    Args:
        file_path: Vault-relative markdown path
        objects_root: Directory root for typed objects (e.g. "objects/")
        pages_root: Directory root for untyped pages (e.g. "pages/")

    Returns:
        Object ID with ``.md`` and any configured root stripped. The objects
        root is checked before the pages root.
    """
    object_id = _strip_md(_normalize_rel_path(file_path))
    objects_root = normalize_dir_root(objects_root)
    pages_root = normalize_dir_root(pages_root)

    if objects_root and object_id.startswith(objects_root):
        return object_id[len(objects_root) :]
    if pages_root and object_id.startswith(pages_root):
        return object_id[len(pages_root) :]
    return object_id


def object_id_to_file_path(
    object_id: str,
    type_name: str = "",
    objects_root: Optional[str] = None,
    pages_root: Optional[str] = None,
) -> str:
    """Convert an object ID to a vault-relative markdown file path.

    Untyped objects (``type_name`` empty or ``"page"``) go under the pages
    root, falling back to the objects root when no pages root is set. Typed
    objects go under the objects root. IDs that already carry a configured
    root are only given the ``.md`` suffix.
    """
    object_id = _strip_md(_normalize_rel_path(object_id))
    objects_root = normalize_dir_root(objects_root)
    pages_root = normalize_dir_root(pages_root)

    if objects_root and object_id.startswith(objects_root):
        return object_id + ".md"
    if pages_root and object_id.startswith(pages_root):
        return object_id + ".md"

    if type_name in ("", "page"):
        root = pages_root or objects_root
    else:
        root = objects_root
    return root + object_id + ".md"


def candidate_file_paths(
    ref: str,
    objects_root: Optional[str] = None,
    pages_root: Optional[str] = None,
) -> list[str]:
    """Vault-relative markdown paths to try when resolving a reference.

    The literal interpretation always comes first, followed by the rooted
    interpretations for each configured root.
    """
    ref = _strip_md(_normalize_rel_path(ref))
    objects_root = normalize_dir_root(objects_root)
    pages_root = normalize_dir_root(pages_root)

    candidates: list[str] = []
    seen: set[str] = set()

    def add(path: str) -> None:
        if path not in seen:
            seen.add(path)
            candidates.append(path)

    add(ref + ".md")
    if objects_root and not ref.startswith(objects_root):
        add(objects_root + ref + ".md")
    if pages_root and not ref.startswith(pages_root):
        add(pages_root + ref + ".md")
    return candidates


def relative_vault_path(file_path: str, vault_path: Optional[str] = None) -> str:
    """Return ``file_path`` relative to ``vault_path`` when it lies inside it.

    Paths outside the vault (or any path when no vault is given) are returned
    with separators normalized but otherwise unchanged.
    """
    path = file_path.replace("\\", "/")
    if not vault_path:
        return path
    vault = vault_path.replace("\\", "/").rstrip("/")
    if not vault:
        return path
    if path == vault:
        return ""
    if path.startswith(vault + "/"):
        return posixpath.normpath(path[len(vault) + 1 :])
    return path

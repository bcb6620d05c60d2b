"""Sidebar navigation built from the mirror's directory tree."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from front_matter import parse_frontmatter

MARKDOWN_EXTENSION = '.md'


@dataclass(frozen=True)
class Leaf:
    label: str
    path: str

    is_folder = False


@dataclass(frozen=True)
class Folder:
    name: str
    children: list = field(default_factory=list)
    expanded: bool = True

    is_folder = True


def _sort_key(entry):
    # Folders first, then case-sensitive name
    return (not entry.is_dir(follow_symlinks=False), entry.name)


def _list_entries(directory):
    try:
        with os.scandir(directory) as it:
            entries = [entry for entry in it if not entry.name.startswith('.')]
    except OSError as e:
        logging.debug(f"Skipping unreadable directory {directory}: {e}")
        return []
    return sorted(entries, key=_sort_key)


def _leaf_for(entry, root):
    try:
        with open(entry.path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()
    except OSError as e:
        logging.debug(f"Skipping unreadable file {entry.path}: {e}")
        return None

    metadata = parse_frontmatter(content).metadata
    label = metadata.get('menu_option') or entry.name[:-len(MARKDOWN_EXTENSION)]
    relative = Path(entry.path).relative_to(root).as_posix()
    return Leaf(label=label, path=relative)


def build_menu(directory, root=None):
    """Walk `directory` and return its folders and markdown documents as menu nodes.

    Leaf paths are relative to `root` (defaults to `directory`). Hidden entries
    and non-markdown files are left out.
    """
    directory = Path(directory)
    root = directory if root is None else Path(root)

    nodes = []
    for entry in _list_entries(directory):
        if entry.is_dir(follow_symlinks=False):
            nodes.append(Folder(name=entry.name, children=build_menu(entry.path, root)))
        elif entry.name.endswith(MARKDOWN_EXTENSION):
            leaf = _leaf_for(entry, root)
            if leaf is not None:
                nodes.append(leaf)
    return nodes

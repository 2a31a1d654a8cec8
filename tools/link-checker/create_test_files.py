#!/usr/bin/env python3
"""
This script creates a sample documentation tree with Markdown,
reStructuredText and README files, plus symlinks and non-documentation
files that the link checker must leave alone.
"""

import os
import shutil
import argparse
from colorama import init, Fore, Style

# Define Colors class for consistent formatting with link_checker.py
class Colors:
    OKGREEN = Fore.GREEN
    INFO = Fore.CYAN
    NEUTRAL = Fore.YELLOW
    ENDC = Style.RESET_ALL

DEAD_HOST = "http://dead.invalid"
LIVE_HOST = "https://example.com"

# Documentation files to create, relative to the root: (content, links in order)
DOC_FILES = {
    "README": (
        "Sample project\n"
        f"See the [home page]({LIVE_HOST}/) for details.\n",
        [f"{LIVE_HOST}/"],
    ),
    "index.md": (
        "# Index\n\n"
        f"* [Guide]({LIVE_HOST}/guide)\n"
        f"* [Broken]({DEAD_HOST}/gone)\n"
        f"* [Guide again]({LIVE_HOST}/guide)\n",
        [f"{LIVE_HOST}/guide", f"{DEAD_HOST}/gone", f"{LIVE_HOST}/guide"],
    ),
    os.path.join("docs", "guide.rst"): (
        "Guide\n=====\n\n"
        f"Read `the manual <{LIVE_HOST}/manual>`_ first,\n"
        f"then `the faq <{DEAD_HOST}/faq>`_.\n",
        [f"{LIVE_HOST}/manual", f"{DEAD_HOST}/faq"],
    ),
    os.path.join("docs", "empty.md"): (
        "Nothing to see here.\n",
        [],
    ),
    os.path.join("docs", "nested", "api.md"): (
        f"[API reference]({LIVE_HOST}/api)\n",
        [f"{LIVE_HOST}/api"],
    ),
    # README in a .txt file uses the Markdown pattern, so the rst target is ignored
    os.path.join("docs", "nested", "deep", "ReadMe.txt"): (
        f"Mirror: [mirror]({DEAD_HOST}/mirror)\n"
        "This `label <ignored.com>`_ is rst syntax in a text file.\n",
        [f"{DEAD_HOST}/mirror"],
    ),
}

# Files that must never be picked up by the checker
OTHER_FILES = {
    "notes.txt": f"[not a doc]({DEAD_HOST}/notes)\n",
    os.path.join("docs", "conf.py"): f"URL = '{DEAD_HOST}/conf'\n",
}

# Symlinks to create: link name -> target, both relative to the root
SYMLINKS = {
    "linked_docs": "docs",
    "alias.md": "index.md",
}

def ensure_directory(directory):
    """Creates a directory if it doesn't exist."""
    if not os.path.exists(directory):
        os.makedirs(directory)
        print(f"Created directory: {directory}")

def clean_test_directory(root):
    """Remove existing test files and directories."""
    if os.path.exists(root):
        print(f"Cleaning up existing test directory: {root}")
        shutil.rmtree(root)
        print(f"Removed {root}")

def write_file(path, content):
    ensure_directory(os.path.dirname(path))
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)

def create_symlinks(root):
    """Create the symlinks, returning the names that could be created."""
    created = []
    for name, target in SYMLINKS.items():
        link_path = os.path.join(root, name)
        try:
            os.symlink(target, link_path, target_is_directory=os.path.isdir(os.path.join(root, target)))
        except OSError as e:
            # Windows without developer mode refuses to create symlinks
            print(f"{Colors.NEUTRAL}Could not create symlink {link_path}: {e}{Colors.ENDC}")
            continue
        created.append(name)
    return created

def build_doc_tree(root, with_symlinks=True):
    """
    Create the sample tree under root.

    Returns:
        Dict mapping each documentation file path (as the checker will print
        it when walking root) to the links it contains, in order
    """
    ensure_directory(root)

    expected = {}
    for rel_path, (content, links) in DOC_FILES.items():
        path = os.path.join(root, rel_path)
        write_file(path, content)
        expected[path] = list(links)

    for rel_path, content in OTHER_FILES.items():
        write_file(os.path.join(root, rel_path), content)

    if with_symlinks:
        create_symlinks(root)

    return expected

def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Create a sample documentation tree for the link checker."
    )
    parser.add_argument(
        "--dir",
        default="test_files",
        help="Directory where test files will be created (relative to script location)"
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove existing test files before creating new ones"
    )
    return parser.parse_args()

def main():
    # Initialize colorama for cross-platform color support
    init(autoreset=True)
    args = parse_args()

    script_dir = os.path.dirname(os.path.abspath(__file__))
    test_root = os.path.join(script_dir, args.dir)

    if args.clean:
        clean_test_directory(test_root)

    expected = build_doc_tree(test_root)

    total_links = sum(len(links) for links in expected.values())
    print(f"{Colors.OKGREEN}Created {len(expected)} documentation files with {total_links} links in {test_root}{Colors.ENDC}")
    print(f"{Colors.INFO}Run: python link_checker.py {test_root}{Colors.ENDC}")

if __name__ == "__main__":
    main()

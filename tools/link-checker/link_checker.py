#!/usr/bin/env python3
# =============================================================================
# Dead Link Checker for Documentation Files
# =============================================================================
# This script walks a directory tree, picks out documentation files
# (Markdown, reStructuredText and README variants), extracts the links
# written in their markup and reports every link that cannot be fetched.
# =============================================================================

import os
import re
import sys
import asyncio
import argparse
from concurrent.futures import ThreadPoolExecutor

import requests
from colorama import init, Fore, Style
from urllib3.exceptions import LocationParseError

# =============================================================================
# CONFIGURATION
# =============================================================================

class Colors:
    INFO = Fore.CYAN       # Cyan for the file currently being checked
    FAIL = Fore.RED        # Red for dead links
    NEUTRAL = Fore.YELLOW  # Yellow for files that could not be read
    ENDC = Style.RESET_ALL

TIMEOUT = 15  # Request timeout in seconds - increase this if you get many timeout errors
HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; LinkChecker/1.0)"}  # Browser-like user agent

# Document format tags
RST = 'RST'
MARKDOWN = 'MARKDOWN'
TXT = 'TXT'  # Any other documentation file, e.g. a bare README

# Documentation files: *.md, *.rst or anything with README in its name (any case)
DOC_FILE_REGEX = re.compile(r'(.*\.md$)|(.*\.rst$)|(?i:README)')

RST_FILE_REGEX = re.compile(r'.*\.rst$')
MARKDOWN_FILE_REGEX = re.compile(r'.*\.md$')

# reStructuredText inline target: `label <url>`_
RST_LINK_REGEX = re.compile(r'`.*? <(?P<link>[^>]*)>`_')
# Markdown link: [label](url)
MARKDOWN_LINK_REGEX = re.compile(r'\[.*?\]\((?P<link>.*?)\)')

LINK_REGEX_BY_FORMAT = {
    RST: RST_LINK_REGEX,
    MARKDOWN: MARKDOWN_LINK_REGEX,
    TXT: MARKDOWN_LINK_REGEX,
}

# Exit codes
EXIT_OK = 0
EXIT_DEAD_LINKS = 1
EXIT_ERROR = 2

def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="link-checker",
        description="Check links in documentation files for dead targets."
    )
    parser.add_argument(
        "target_dir",
        help="Directory in which the check will be done"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=TIMEOUT,
        help=f"Timeout in seconds for HTTP requests (default: {TIMEOUT})"
    )
    parser.add_argument(
        "--strict-status",
        action="store_true",
        help="Also report links answering with an HTTP error status (>= 400) as dead"
    )
    return parser.parse_args(argv)

# =============================================================================
# FILE & LINK PROCESSING FUNCTIONS
# =============================================================================

def is_doc_file(name):
    """Check whether a file name looks like a documentation file."""
    return DOC_FILE_REGEX.search(name) is not None

def file_format(name):
    """
    Detect the document format from a file name.

    reStructuredText wins over Markdown; everything else (README, README.txt,
    ...) falls back to TXT, which is parsed with the Markdown link pattern.
    """
    if RST_FILE_REGEX.match(name):
        return RST
    elif MARKDOWN_FILE_REGEX.match(name):
        return MARKDOWN
    else:
        return TXT

def extract_links(text, fmt):
    """Return all links in text, in order of appearance, duplicates included."""
    regex = LINK_REGEX_BY_FORMAT[fmt]
    return [match.group('link') for match in regex.finditer(text)]

def extract_links_from_file(path, fmt):
    """
    Read a documentation file and extract its links.

    Args:
        path: Path of the file to read
        fmt: Document format tag (RST, MARKDOWN or TXT)

    Returns:
        List of link strings, empty when the file cannot be read
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"{Colors.NEUTRAL}Can't read file {path} (because {e}){Colors.ENDC}")
        return []
    return extract_links(content, fmt)

def list_directory(path):
    # Symlinks are dropped here so that the walk can neither loop nor leave the tree
    with os.scandir(path) as it:
        return [
            entry for entry in it
            if not entry.is_symlink()
            and (entry.is_dir() or is_doc_file(entry.name))
        ]

async def visit_doc_files(root, callback):
    """
    Walk root depth-first and await callback(entry) for every documentation file.

    Pending directory listings are kept on an explicit stack, so files and
    subdirectories are visited in the same order a recursive descent would
    visit them. Files are handled one after the other. A directory that
    cannot be listed raises OSError and ends the walk.
    """
    if not os.path.isdir(root):
        return

    stack = [iter(list_directory(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if entry.is_symlink():
            raise RuntimeError(f"Symlink reached the walker: {entry.path}")
        if entry.is_dir():
            stack.append(iter(list_directory(entry.path)))
        else:
            await callback(entry)

# =============================================================================
# LINK VALIDATION
# =============================================================================

def fetch(link, timeout=TIMEOUT, strict_status=False):
    with requests.get(link, headers=HEADERS, timeout=timeout, stream=True) as response:
        if strict_status:
            response.raise_for_status()

async def check_link_validity(link, timeout=TIMEOUT, strict_status=False, executor=None):
    """
    Check that a link can be fetched, printing a line when it cannot.

    Only request failures (bad URL, DNS, connection, timeout, ...) count as
    dead unless strict_status is set, in which case HTTP error statuses do too.
    The request runs on executor, or on the loop's default executor when None.
    """
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(executor, fetch, link, timeout, strict_status)
    except (requests.RequestException, LocationParseError):
        # urllib3 raises LocationParseError itself for hosts with empty or over-long labels
        print(f"{Colors.FAIL}--- Dead link : {link}{Colors.ENDC}")
        return False
    return True

async def check_file(entry, timeout=TIMEOUT, strict_status=False):
    """Check every link of one file concurrently; return the number of dead links."""
    links = extract_links_from_file(entry.path, file_format(entry.name))

    print(f"{Colors.INFO}checking {entry.path} ..{Colors.ENDC}")
    if not links:
        return 0

    # One thread per link so that every request of the file is in flight at once
    with ThreadPoolExecutor(max_workers=len(links)) as executor:
        results = await asyncio.gather(
            *(check_link_validity(link, timeout, strict_status, executor) for link in links)
        )
    return results.count(False)

async def check_directory(root, timeout=TIMEOUT, strict_status=False):
    """Check all documentation files under root; return the total number of dead links."""
    dead_links = 0

    async def on_doc_file(entry):
        nonlocal dead_links
        dead_links += await check_file(entry, timeout, strict_status)

    await visit_doc_files(root, on_doc_file)
    return dead_links

# =============================================================================
# MAIN EXECUTION
# =============================================================================

def main(argv=None):
    args = parse_arguments(argv)

    try:
        dead_links = asyncio.run(
            check_directory(args.target_dir, args.timeout, args.strict_status)
        )
    except OSError as e:
        print(f"Error: cannot read directory {e.filename} ({e.strerror})", file=sys.stderr)
        return EXIT_ERROR

    # Exit code 1 signals that dead links were found
    return EXIT_DEAD_LINKS if dead_links else EXIT_OK

def cli():
    # Strips colour codes when stdout is not a terminal
    init()
    sys.exit(main())

if __name__ == "__main__":
    cli()

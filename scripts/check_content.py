#!/usr/bin/env python3
"""
Check every article in a content directory for front-matter errors.

Usage:
    python scripts/check_content.py [content_dir]

Defaults to $CONTENT_DIR, then content/articles. Exits with status 1 when
any file fails to parse. Output matches `flask check-content`.
"""

import logging
import os
import sys

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from services.content_loader import ContentLoader, report_load_result


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.ERROR, format="[%(levelname)s] %(message)s")

    content_dir = argv[0] if argv else os.environ.get(
        'CONTENT_DIR', os.path.join(project_root, 'content', 'articles')
    )
    print(f"Checking articles in: {content_dir}")

    loader = ContentLoader(content_dir)
    return report_load_result(loader.load_all(), print)


if __name__ == "__main__":
    sys.exit(main())

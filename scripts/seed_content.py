"""
Seed the configured content backend with the bundled default content
"""

import argparse
import asyncio
import getpass
import os
import sys

# Add the parent directory to the path so we can import our modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.backends.registry import get_backend_adapter
from services.content.defaults import default_site_content
from utils.auth import EditorCredential, EditorIdentity, EditorSession
from utils.config import get_config
from utils.exceptions import SiteContentException
from utils.logging import setup_logging, get_logger

SEED_MESSAGE = "chore(content): seed site content defaults"


def build_session(email: str, password: str) -> EditorSession:
    config = get_config()
    identity = EditorIdentity(email=email or config.git_commit_author_email, name=None if email else config.git_commit_author_name)
    credential = EditorCredential(email=email, password=password) if email and password else None
    return EditorSession(identity=identity, credential=credential)


async def seed(force: bool, session: EditorSession) -> bool:
    """Write the defaults unless a document already exists (or force)"""
    logger = get_logger(__name__)
    config = get_config()
    adapter = get_backend_adapter(config)
    try:
        if not force:
            existing = await adapter.fetch_document()
            if existing.found:
                logger.info(f"Content already present on the {adapter.backend_name} backend; nothing to do")
                return False
        result = await adapter.persist_document(default_site_content(), session, SEED_MESSAGE)
        logger.info(f"Seeded {adapter.backend_name} backend at {result.path} (version {result.version})")
        return True
    finally:
        await adapter.aclose()


async def main():
    """Main seeding function"""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--force", action="store_true", help="overwrite existing content")
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"), help="editor email (rest backend)")
    args = parser.parse_args()

    setup_logging()
    logger = get_logger(__name__)

    password = os.getenv("ADMIN_PASSWORD")
    if args.email and not password:
        password = getpass.getpass(f"Password for {args.email}: ")

    try:
        await seed(args.force, build_session(args.email, password))
    except SiteContentException as e:
        logger.error(f"Content seeding failed: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())

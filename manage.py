#!/usr/bin/env python3
"""
Catroweb CLI — maintenance commands.

Usage:
    python manage.py reset-admin
    python manage.py purge-remix-relations

reset-admin reads CATROWEB_ADMIN_USERNAME, CATROWEB_ADMIN_EMAIL and
CATROWEB_ADMIN_PASSWORD from env vars (or .env file). If the user exists,
resets their password and ensures the account is enabled with the
super-admin role; otherwise creates it.
"""

import logging
import os
import sys

from dotenv import load_dotenv

logger = logging.getLogger('catroweb.manage')


def reset_admin():
    """Reset or create the super-admin account from env vars."""
    load_dotenv()

    username = os.getenv('CATROWEB_ADMIN_USERNAME', 'admin').strip()
    email = os.getenv('CATROWEB_ADMIN_EMAIL')
    password = os.getenv('CATROWEB_ADMIN_PASSWORD')

    if not email or not password:
        logger.error("CATROWEB_ADMIN_EMAIL and CATROWEB_ADMIN_PASSWORD must be set.")
        sys.exit(1)

    email = email.strip().lower()

    if len(password) < 6:
        logger.error("CATROWEB_ADMIN_PASSWORD must be at least 6 characters.")
        sys.exit(1)

    from app import create_app
    app = create_app()

    with app.app_context():
        from app.models import db, User
        from app.services.registration import generate_upload_token

        user = User.query.filter_by(username=username).first()

        if user:
            user.set_password(password)
            user.enabled = True
            user.role = User.ROLE_SUPER_ADMIN
            db.session.commit()
            logger.info("Password reset and account re-enabled for %s", username)
        else:
            user = User(
                username=username,
                email=email,
                role=User.ROLE_SUPER_ADMIN,
                enabled=True,
                upload_token=generate_upload_token(),
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            logger.info("Super admin account created for %s", username)


def purge_remix_relations():
    """Delete every Scratch remix relation."""
    from app import create_app
    app = create_app()

    with app.app_context():
        from app.repositories import ScratchProgramRemixRepository
        deleted = ScratchProgramRemixRepository.remove_all_relations()
        logger.info("Deleted %d scratch remix relations", deleted)


COMMANDS = {
    'reset-admin': reset_admin,
    'purge-remix-relations': purge_remix_relations,
}


def main():
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(message)s')

    if len(sys.argv) < 2:
        print("Usage: python manage.py <command>")
        print("Commands:")
        print("  reset-admin             Reset or create super-admin account from env vars")
        print("  purge-remix-relations   Remove all Scratch remix relations")
        sys.exit(1)

    command = COMMANDS.get(sys.argv[1])
    if command is None:
        logger.error("Unknown command: %s", sys.argv[1])
        sys.exit(1)
    command()


if __name__ == '__main__':
    main()

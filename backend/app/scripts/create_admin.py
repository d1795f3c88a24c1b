"""
VeggieFresh Admin API — Bootstrap Admin User
==============================================

What:  Creates the first admin account so someone can log in to the panel.
How:   Reads ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME from settings (or the
       --email / --password / --name flags), hashes the password with bcrypt
       and inserts a `role=admin` user. An existing user with that email is
       left untouched.

Usage:
    python -m app.scripts.create_admin
    python -m app.scripts.create_admin --email ops@veggiefresh.com --name "Ops"
    veggiefresh-create-admin  (console script)

Exit codes: 0 created or already present, 1 error.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session_factory, dispose_engine
from app.models.user import User, UserRole
from app.security import hash_password

logger = logging.getLogger("veggiefresh.create_admin")

CREATED = "created"
EXISTS = "exists"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the initial admin user")
    parser.add_argument("--email", default=settings.admin_email, help="Admin email (ADMIN_EMAIL)")
    parser.add_argument("--password", default=settings.admin_password, help="Admin password (ADMIN_PASSWORD)")
    parser.add_argument("--name", default=settings.admin_name, help="Display name (ADMIN_NAME)")
    return parser.parse_args(argv)


async def create_admin_user(
    session: AsyncSession,
    email: str,
    password: str,
    name: str,
) -> str:
    """
    Inserts the admin unless the email is already registered.

    Returns CREATED or EXISTS. The caller owns the transaction.
    """
    email = email.strip().lower()
    result = await session.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        return EXISTS

    session.add(
        User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.ADMIN.value,
            is_phone_verified=True,
        )
    )
    await session.flush()
    return CREATED


async def run(email: str, password: str, name: str) -> int:
    try:
        async with async_session_factory() as session:
            outcome = await create_admin_user(session, email, password, name)
            await session.commit()
    except IntegrityError:
        logger.error("A user with email %s already exists", email)
        return 1
    except SQLAlchemyError as e:
        logger.error("Error creating admin user: %s", str(e))
        return 1
    finally:
        await dispose_engine()

    if outcome == EXISTS:
        logger.info("Admin user with email %s already exists", email)
        logger.info("To reset the password, delete the existing user first.")
        return 0

    logger.info("Admin user created: %s", email)
    logger.warning("Change the default password after the first login!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = parse_args(argv)
    if not args.password:
        logger.error("An admin password is required (ADMIN_PASSWORD or --password)")
        return 1
    return asyncio.run(run(args.email, args.password, args.name))


if __name__ == "__main__":
    sys.exit(main())

"""
Create a user directly in the store (e.g. first admin). Run from project root:
  python -m casedesk.scripts.create_user EMAIL PASSWORD [role] [--name NAME]
Example:
  python -m casedesk.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from casedesk.core.config import get_settings
from casedesk.core.database import Store
from casedesk.core.errors import ConflictError, InvalidInputError
from casedesk.core.security import Role
from casedesk.services import accounts

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a casedesk user.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=[r.value for r in Role])
    parser.add_argument("--name", default="", help="Display name")
    args = parser.parse_args(argv)

    settings = get_settings()
    store = Store(settings.DATABASE_URL, create_tables=settings.AUTO_CREATE_TABLES)
    store.connect()
    db = store.session()
    try:
        user = accounts.register(
            db,
            email=args.email.strip(),
            password=args.password,
            name=args.name,
            rounds=settings.BCRYPT_ROUNDS,
        )
        if args.role == Role.ADMIN.value:
            user.role = Role.ADMIN.value
            db.commit()
        print(f"Created user '{user.email}' with role '{args.role}' (id={user.id}).")
        return 0
    except (InvalidInputError, ConflictError) as e:
        print(e.message, file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Creating user failed: %s", e)
        return 1
    finally:
        db.close()
        store.dispose()


if __name__ == "__main__":
    sys.exit(main())
